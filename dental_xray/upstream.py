from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from .config import DEFAULT_MODEL_URL, require_hf_token
from .errors import UpstreamError

logger = logging.getLogger(__name__)


@dataclass
class HuggingFaceClient:
    """Forward raw image bytes to the hosted image-classification model."""

    model_url: str = DEFAULT_MODEL_URL
    timeout: Optional[float] = None

    def forward(self, image_bytes: bytes, token: Optional[str] = None) -> bytes:
        """Return the upstream response body untouched."""
        return self._post(image_bytes, token).content

    def classify(self, image_bytes: bytes, token: Optional[str] = None) -> Any:
        return self._post(image_bytes, token).json()

    def _post(self, image_bytes: bytes, token: Optional[str]) -> requests.Response:
        token = token or require_hf_token()
        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/octet-stream",
            "Accept": "application/json",
        }
        logger.info("Forwarding %d bytes to %s", len(image_bytes), self.model_url)
        response = requests.post(
            self.model_url,
            headers=headers,
            data=image_bytes,
            timeout=self.timeout,
        )
        if not response.ok:
            logger.warning(
                "Classification service returned status=%s body=%s",
                response.status_code,
                response.text[:200],
            )
            raise UpstreamError(response.status_code, response.text)
        return response


__all__ = ["HuggingFaceClient"]
