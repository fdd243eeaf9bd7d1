"""Tests for environment-driven settings."""

import pydantic
import pytest

from iondid.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("LOG_FORMAT", "LOG_LEVEL", "CANONICAL_SIGNATURES", "DID_METHOD"):
            monkeypatch.delenv(f"IONDID_{name}", raising=False)
        s = Settings()
        assert s.log_format == "text"
        assert s.log_level == "INFO"
        assert s.canonical_signatures is True
        assert s.did_method == "ion"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("IONDID_LOG_FORMAT", "JSON")
        monkeypatch.setenv("IONDID_LOG_LEVEL", "debug")
        monkeypatch.setenv("IONDID_CANONICAL_SIGNATURES", "false")
        monkeypatch.setenv("IONDID_DID_METHOD", "Elem")
        s = Settings()
        assert s.log_format == "json"
        assert s.log_level == "DEBUG"
        assert s.canonical_signatures is False
        assert s.did_method == "elem"

    @pytest.mark.parametrize(
        ("name", "value"),
        [("LOG_FORMAT", "xml"), ("LOG_LEVEL", "LOUD"), ("DID_METHOD", "not a method")],
    )
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(f"IONDID_{name}", value)
        with pytest.raises(pydantic.ValidationError):
            Settings()
