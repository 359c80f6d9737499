"""Startup configuration: FMP API key and base address, read once."""
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict

from fmp_mcp_server.common.errors import ConfigurationMissing
from fmp_mcp_server.tools.config import FMP_API_BASE, logger

# ────────────────────────────────────────────────────────
# paths + env
# ────────────────────────────────────────────────────────
THIS_DIR = Path(__file__).resolve()
PROJECT_ROOT = THIS_DIR.parent.parent.parent

API_KEY_ENV = "FMP_API_KEY"
BASE_URL_ENV = "FMP_BASE_URL"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    fmp_api_key: str
    fmp_base_url: str = FMP_API_BASE


def load_environment() -> None:
    """Pull variables from config/.env under the project root, then the
    nearest .env at or above the working directory.

    Values already present in the environment win.
    """
    load_dotenv(PROJECT_ROOT / "config/.env")
    load_dotenv(find_dotenv(usecwd=True))


def load_settings() -> Settings:
    api_key = os.environ.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise ConfigurationMissing(API_KEY_ENV)

    base_url = os.environ.get(BASE_URL_ENV, "").strip() or FMP_API_BASE
    logger.debug(f"Using FMP base URL {base_url}")
    return Settings(fmp_api_key=api_key, fmp_base_url=base_url.rstrip("/"))
