"""
Unit tests for config/settings.py

Tests configuration loading from the environment and validation.
"""
import pytest
from pydantic import ValidationError as PydanticValidationError

from logo_server.config.settings import DEFAULT_IMAGE_DIRECTORY, Settings


# ── Default values ──────────────────────────────────────────────────────────

def test_default_port():
    s = Settings()
    assert s.port == 3000


def test_default_host_all_interfaces():
    s = Settings()
    assert s.host == "0.0.0.0"


def test_default_image_is_bundled_logo():
    s = Settings()
    assert s.image_directory == DEFAULT_IMAGE_DIRECTORY
    assert s.image_file_name == "logo.png"
    assert s.image_path.is_file()


def test_default_logging():
    s = Settings()
    assert s.log_level == "INFO"
    assert s.log_json is False
    assert s.log_dir is None


# ── Environment ─────────────────────────────────────────────────────────────

def test_port_from_port_env(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings().port == 8080


def test_port_from_prefixed_env(monkeypatch):
    monkeypatch.setenv("LOGO_SERVER_PORT", "8181")
    assert Settings().port == 8181


def test_image_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("LOGO_SERVER_IMAGE_DIRECTORY", str(tmp_path))
    monkeypatch.setenv("LOGO_SERVER_IMAGE_FILE_NAME", "banner.jpg")
    s = Settings()
    assert s.image_path == (tmp_path / "banner.jpg").resolve()


def test_init_arguments_override_env(monkeypatch):
    monkeypatch.setenv("PORT", "8080")
    assert Settings(port=9090).port == 9090


# ── Port validation ─────────────────────────────────────────────────────────

def test_port_zero_allowed():
    assert Settings(port=0).port == 0


def test_port_negative_raises():
    with pytest.raises(PydanticValidationError):
        Settings(port=-1)


def test_port_too_high_raises():
    with pytest.raises(PydanticValidationError):
        Settings(port=65536)


def test_port_not_a_number_raises(monkeypatch):
    monkeypatch.setenv("PORT", "http")
    with pytest.raises(PydanticValidationError):
        Settings()


# ── Log level validation ────────────────────────────────────────────────────

def test_log_level_normalized_to_uppercase():
    s = Settings(log_level="debug")
    assert s.log_level == "DEBUG"


def test_log_level_invalid_raises():
    with pytest.raises(PydanticValidationError):
        Settings(log_level="VERBOSE")


# ── Image file name validation ──────────────────────────────────────────────

@pytest.mark.parametrize("name", ["", ".", "..", "../secret.png", "sub/logo.png", "sub\\logo.png"])
def test_image_file_name_must_be_bare_name(name):
    with pytest.raises(PydanticValidationError):
        Settings(image_file_name=name)


def test_image_path_is_absolute(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = Settings(image_directory="assets", image_file_name="logo.png")
    assert s.image_path.is_absolute()
    assert s.image_path == (tmp_path / "assets" / "logo.png").resolve()
