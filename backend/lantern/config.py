"""
Runtime configuration - environment-driven settings for the engine
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

PROJECT_ROOT = Path(__file__).parent.parent.parent


def get_log_level() -> str:
    """Get configured log level name"""
    return os.getenv("LANTERN_LOG_LEVEL", "WARNING").upper()


def session_logs_enabled() -> bool:
    """Whether per-session turn transcripts are written to disk"""
    return os.getenv("LANTERN_SESSION_LOGS", "false").lower() in ("1", "true", "yes", "on")


def get_logs_dir() -> Path:
    """Get directory for session transcripts"""
    return Path(os.getenv("LANTERN_LOGS_DIR", str(PROJECT_ROOT / "logs")))


def get_worlds_dir() -> Path:
    """Get directory holding YAML world definitions"""
    return Path(os.getenv("LANTERN_WORLDS_DIR", str(PROJECT_ROOT / "worlds")))


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the lantern logger tree"""
    level_name = level or get_log_level()
    if not logging.getLogger().handlers:
        logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("lantern").setLevel(getattr(logging, level_name.upper(), logging.WARNING))
