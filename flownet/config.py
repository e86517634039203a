import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

DEFAULT_LOG_FORMAT = '[%(asctime)s] %(levelname)s: %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

TRUE_VALUES = {'1', 'true', 'yes', 'on'}


def load_settings() -> Dict[str, Any]:
    """Load runtime settings from the environment (and a .env file if present)."""
    load_dotenv()

    return {
        'log_level': os.getenv('FLOWNET_LOG_LEVEL', 'WARNING').upper(),
        'log_format': os.getenv('FLOWNET_LOG_FORMAT', DEFAULT_LOG_FORMAT),
        'verify': os.getenv('FLOWNET_VERIFY', '').strip().lower() in TRUE_VALUES,
    }


def configure_logging(level: Optional[str] = None, settings: Optional[Dict[str, Any]] = None):
    """
    Configure root logging for command-line use.

    Args:
        level: Log level name overriding the configured one
        settings: Pre-loaded settings (loaded from the environment when omitted)
    """
    if settings is None:
        settings = load_settings()

    level_name = (level or settings['log_level']).upper()
    numeric_level = getattr(logging, level_name, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level_name}")

    logging.basicConfig(
        level=numeric_level,
        format=settings['log_format'],
        datefmt=DEFAULT_DATE_FORMAT
    )
    return numeric_level
