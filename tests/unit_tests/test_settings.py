import pytest
from pydantic import ValidationError

from upload_api.config.settings import Settings


def test_defaults(monkeypatch):
    for name in ["HOST", "PORT", "STORAGE_DIR", "MAX_UPLOAD_SIZE", "LOG_LEVEL"]:
        monkeypatch.delenv(f"UPLOAD_API_{name}", raising=False)

    settings = Settings(_env_file=None)

    assert settings.host == "0.0.0.0"
    assert settings.port == 9393
    assert settings.storage_dir == "./upload"
    assert settings.max_upload_size == 2_000_000
    assert settings.token_bytes == 12
    assert settings.max_request_body_size == 2_000_000 + settings.multipart_overhead_bytes


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("UPLOAD_API_PORT", "8080")
    monkeypatch.setenv("UPLOAD_API_STORAGE_DIR", str(tmp_path))
    monkeypatch.setenv("UPLOAD_API_LOG_LEVEL", "debug")

    settings = Settings(_env_file=None)

    assert settings.port == 8080
    assert settings.storage_dir == str(tmp_path)
    assert settings.log_level == "DEBUG"


def test_invalid_values():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="LOUD")
    with pytest.raises(ValidationError):
        Settings(_env_file=None, max_upload_size=0)
    with pytest.raises(ValidationError):
        Settings(_env_file=None, port=70000)
