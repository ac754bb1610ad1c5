import logging
from typing import Optional

from signalkit.core.exceptions import ConfigurationError
from signalkit.settings import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure logging once for an application embedding signalkit."""
    log_level = (level or settings.log_level).upper()
    numeric_level = logging.getLevelName(log_level)
    if not isinstance(numeric_level, int):
        raise ConfigurationError(f"Unknown log level '{log_level}'")
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=numeric_level,
        force=True,  # ensure we override any prior configuration
    )
