import pytest

from dental_xray.config import DEFAULT_MODEL_URL, Settings, require_hf_token
from dental_xray.errors import ConfigurationError


def test_defaults(monkeypatch):
    for name in ("HF_MODEL_URL", "HF_TIMEOUT", "DENTAL_XRAY_HOST", "DENTAL_XRAY_PORT"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()

    assert settings.model_url == DEFAULT_MODEL_URL
    assert settings.timeout is None
    assert settings.host == "0.0.0.0"
    assert settings.port == 8000


def test_overrides(monkeypatch):
    monkeypatch.setenv("HF_MODEL_URL", "https://example.test/model")
    monkeypatch.setenv("HF_TIMEOUT", "7.5")
    monkeypatch.setenv("DENTAL_XRAY_PORT", "9000")

    settings = Settings.from_env()

    assert settings.model_url == "https://example.test/model"
    assert settings.timeout == 7.5
    assert settings.port == 9000


def test_invalid_values_fall_back_to_defaults(monkeypatch, caplog):
    monkeypatch.setenv("HF_TIMEOUT", "soon")
    monkeypatch.setenv("DENTAL_XRAY_PORT", "eighty")

    with caplog.at_level("WARNING", logger="dental_xray.config"):
        settings = Settings.from_env()

    assert settings.timeout is None
    assert settings.port == 8000
    assert "HF_TIMEOUT" in caplog.text
    assert "DENTAL_XRAY_PORT" in caplog.text


def test_token_is_read_on_each_call(monkeypatch):
    monkeypatch.delenv("HF_TOKEN", raising=False)
    with pytest.raises(ConfigurationError) as excinfo:
        require_hf_token()
    assert excinfo.value.to_payload() == {"error": "Server missing HF_TOKEN in environment"}

    monkeypatch.setenv("HF_TOKEN", "later")
    assert require_hf_token() == "later"
