import logging
import os
from typing import Dict, Mapping, Optional

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


class Settings:
    """Settings container read explicitly from the environment."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None) -> None:
        env = os.environ if environ is None else environ
        self.environment = env.get("SIGNALKIT_ENV", "base")
        self.log_level = env.get("SIGNALKIT_LOG_LEVEL", "INFO").upper()
        # Per-dispatch debug records are noisy; opt in explicitly.
        self.trace_dispatch = _flag(env.get("SIGNALKIT_TRACE_DISPATCH"))

    def validate(self) -> Dict[str, str]:
        """Validate configuration and return any errors."""
        errors = {}

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors["log_level"] = (
                f"Unknown log level '{self.log_level}' (SIGNALKIT_LOG_LEVEL)"
            )

        return errors


settings = Settings()
