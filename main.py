"""Main entry point for the Safe Route Builder.

Run FastAPI server:
    uvicorn saferoute.main:app --reload
"""
if __name__ == '__main__':
    import uvicorn
    uvicorn.run("saferoute.main:app", host="0.0.0.0", port=8000, reload=True)
