"""Tests for marginalia.core.config_schema and Config.validated()."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from marginalia.core.config import Config, reset_config
from marginalia.core.config_schema import MarginaliaConfig


@pytest.fixture(autouse=True)
def _reset_singleton():
    reset_config()
    yield
    reset_config()


@pytest.mark.smoke
class TestConfigSchema:
    def test_valid_config_roundtrip(self):
        cfg = MarginaliaConfig.model_validate(
            {
                "paths": {"data_dir": "/tmp/test-data"},
                "store": {"backend": "firestore", "project_id": "journal-prod"},
                "pagination": {"page_size": 10},
                "media": {"upload_prefix": "/files"},
                "markup": {"allowed_fonts": ["Lora"], "strict_colors": False},
                "upload": {"max_bytes": 1024},
                "logging": {"level": "debug"},
            }
        )
        assert cfg.paths.data_dir == Path("/tmp/test-data")
        assert cfg.store.backend == "firestore"
        assert cfg.pagination.page_size == 10
        assert cfg.media.upload_prefix == "/files/"
        assert cfg.markup.allowed_fonts == ["Lora"]
        assert cfg.markup.strict_colors is False
        assert cfg.upload.max_bytes == 1024
        assert cfg.logging.level == "DEBUG"

    def test_defaults_populate(self):
        cfg = MarginaliaConfig()
        assert cfg.store.backend == "memory"
        assert cfg.store.collection == "journalEntries"
        assert cfg.pagination.page_size == 5
        assert cfg.markup.strict_colors is True
        assert cfg.upload.allowed_types == ["image/jpeg", "image/png", "image/webp"]

    def test_path_expansion(self):
        cfg = MarginaliaConfig.model_validate({"paths": {"data_dir": "~/.marginalia"}})
        assert cfg.paths.data_dir.is_absolute()

    def test_page_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            MarginaliaConfig.model_validate({"pagination": {"page_size": 0}})

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            MarginaliaConfig.model_validate({"store": {"backend": "mongo"}})

    def test_extra_keys_allowed_at_root(self):
        cfg = MarginaliaConfig.model_validate({"custom_section": {"key": "value"}})
        assert cfg.model_extra["custom_section"] == {"key": "value"}

    def test_config_validated_integration(self, tmp_config_file, tmp_dir):
        validated = Config(config_file=tmp_config_file, data_dir=tmp_dir).validated()
        assert isinstance(validated, MarginaliaConfig)
        assert validated.pagination.page_size == 3
        assert validated.store.collection == "testEntries"

    def test_env_strings_coerced(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MARGINALIA_PAGINATION__PAGE_SIZE", "12")
        monkeypatch.setenv("MARGINALIA_MARKUP__STRICT_COLORS", "false")
        validated = Config(data_dir=tmp_dir).validated()
        assert validated.pagination.page_size == 12
        assert validated.markup.strict_colors is False

    def test_env_lists_split_on_commas(self, monkeypatch, tmp_dir):
        monkeypatch.setenv("MARGINALIA_MARKUP__ALLOWED_FONTS", "Inter,Lora")
        monkeypatch.setenv("MARGINALIA_UPLOAD__ALLOWED_TYPES", "image/png")
        validated = Config(data_dir=tmp_dir).validated()
        assert validated.markup.allowed_fonts == ["Inter", "Lora"]
        assert validated.upload.allowed_types == ["image/png"]
