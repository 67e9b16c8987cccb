from __future__ import annotations

from typing import Any, Dict, Optional


class AnalyzerError(Exception):
    """Base error rendered to callers as a JSON body with an ``error`` field."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message}


class InputError(AnalyzerError):
    status_code = 400

    def __init__(self, message: str = "No file provided", detail: Optional[str] = None) -> None:
        super().__init__(message)
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.detail is not None:
            payload["detail"] = self.detail
        return payload


class ConfigurationError(AnalyzerError):
    status_code = 500


class UpstreamError(AnalyzerError):
    """Non-success response from the classification service."""

    status_code = 502

    def __init__(self, status: int, detail: str) -> None:
        super().__init__("Hugging Face API error")
        self.status = status
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "status": self.status, "detail": self.detail}


class InternalError(AnalyzerError):
    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__("Unexpected server error")
        self.detail = detail

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "detail": self.detail}


__all__ = [
    "AnalyzerError",
    "ConfigurationError",
    "InputError",
    "InternalError",
    "UpstreamError",
]
