"""Main FastAPI application."""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from saferoute.api import routes, search
from saferoute.config import get_settings
from saferoute.domain.hazard import SAFE_MARGIN_KM

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Routing via {settings.osrm_base_url} ({settings.osrm_profile})")
    yield
    routes.close_orchestrator()


app = FastAPI(
    title="Safe Route Builder",
    description="Alternative routes that avoid circular hazard zones",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

app.include_router(routes.router)
app.include_router(search.router)


@app.get("/")
async def root():
    """Describe the service and its routing setup."""
    return {
        "service": "saferoute",
        "version": app.version,
        "endpoints": {
            "routes": "/api/routes",
            "routes_geojson": "/api/routes/geojson",
            "search": "/api/search",
            "geocode": "/api/geocode"
        },
        "routing": {
            "backend": settings.osrm_base_url,
            "profile": settings.osrm_profile
        },
        "safe_margin_km": SAFE_MARGIN_KM,
        "docs": "/docs"
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "routing_profile": settings.osrm_profile}
