"""
Logging setup shared by the web app and the CLI
"""
import logging
import sys
from typing import Dict, Optional

from .config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_configured = False


def configure_logging(settings: Settings, module_levels: Optional[Dict[str, str]] = None) -> None:
    """Configure root + package loggers once per process"""
    global _configured
    if _configured:
        return

    levels = {
        "root": settings.log_level,
        "neon_rps": settings.log_level,
        "uvicorn.error": "INFO",
        "uvicorn.access": "INFO" if settings.log_uvicorn_access else "WARNING",
    }
    if module_levels:
        levels.update(module_levels)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    logging.basicConfig(
        level=getattr(logging, levels["root"].upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )
    for name, level in levels.items():
        if name != "root":
            logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    _configured = True
