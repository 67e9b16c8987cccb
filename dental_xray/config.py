from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL_URL = "https://api-inference.huggingface.co/models/microsoft/resnet-50"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
TOKEN_ENV_VAR = "HF_TOKEN"


@dataclass
class Settings:
    """Runtime settings read from the process environment."""

    model_url: str = DEFAULT_MODEL_URL
    timeout: Optional[float] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls) -> "Settings":
        timeout_value = os.environ.get("HF_TIMEOUT", "").strip()
        timeout = None
        if timeout_value:
            try:
                timeout = float(timeout_value)
            except ValueError:
                logger.warning("Ignoring invalid HF_TIMEOUT=%r; requests will not time out", timeout_value)

        port_value = os.environ.get("DENTAL_XRAY_PORT", "").strip()
        port = DEFAULT_PORT
        if port_value:
            try:
                port = int(port_value)
            except ValueError:
                logger.warning("Ignoring invalid DENTAL_XRAY_PORT=%r; using %d", port_value, DEFAULT_PORT)

        return cls(
            model_url=os.environ.get("HF_MODEL_URL", "").strip() or DEFAULT_MODEL_URL,
            timeout=timeout,
            host=os.environ.get("DENTAL_XRAY_HOST", "").strip() or DEFAULT_HOST,
            port=port,
        )


def require_hf_token() -> str:
    # Looked up on every call so a missing credential fails per request, not at startup.
    token = os.environ.get(TOKEN_ENV_VAR, "").strip()
    if not token:
        raise ConfigurationError(f"Server missing {TOKEN_ENV_VAR} in environment")
    return token


__all__ = ["DEFAULT_MODEL_URL", "Settings", "TOKEN_ENV_VAR", "require_hf_token"]
