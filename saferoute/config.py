"""Runtime configuration loaded from the environment."""
from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Settings:
    """External service endpoints and pipeline tuning."""
    osrm_base_url: str = "https://router.project-osrm.org"
    osrm_profile: str = "driving"
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    http_timeout: float = 10.0  # seconds
    max_workers: int = 1  # 1 = resolve candidates one at a time
    user_agent: str = "saferoute/1.0"
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build settings from environment variables, falling back to defaults."""
    defaults = Settings()
    return Settings(
        osrm_base_url=os.getenv("OSRM_BASE_URL", defaults.osrm_base_url).rstrip("/"),
        osrm_profile=os.getenv("OSRM_PROFILE", defaults.osrm_profile),
        nominatim_url=os.getenv("NOMINATIM_URL", defaults.nominatim_url).rstrip("/"),
        http_timeout=float(os.getenv("SAFEROUTE_HTTP_TIMEOUT", defaults.http_timeout)),
        max_workers=max(1, int(os.getenv("SAFEROUTE_MAX_WORKERS", defaults.max_workers))),
        user_agent=os.getenv("SAFEROUTE_USER_AGENT", defaults.user_agent),
        log_level=os.getenv("SAFEROUTE_LOG_LEVEL", defaults.log_level).upper(),
    )
