import pytest

from memory_match.config import CoordinatorConfig
from memory_match.exceptions import ConfigurationError, MemoryMatchException


@pytest.mark.unit
class TestCoordinatorConfig:

    def test_defaults(self):
        config = CoordinatorConfig()
        assert config.celebration_delay == 2.5
        assert config.wiggle_delay == 0.65
        assert config.mismatch_delay == 1.5

    def test_from_env_uses_defaults_when_unset(self, monkeypatch):
        for name in ("CELEBRATION_DELAY", "WIGGLE_DELAY", "MISMATCH_DELAY"):
            monkeypatch.delenv(f"MEMORY_MATCH_{name}", raising=False)
        assert CoordinatorConfig.from_env() == CoordinatorConfig()

    def test_from_env_reads_overrides(self, monkeypatch):
        monkeypatch.setenv("MEMORY_MATCH_CELEBRATION_DELAY", "3")
        monkeypatch.setenv("MEMORY_MATCH_WIGGLE_DELAY", "0.5")
        monkeypatch.setenv("MEMORY_MATCH_MISMATCH_DELAY", "2.25")

        config = CoordinatorConfig.from_env()

        assert config.celebration_delay == 3.0
        assert config.wiggle_delay == 0.5
        assert config.mismatch_delay == 2.25

    def test_from_env_rejects_non_numeric(self, monkeypatch):
        monkeypatch.setenv("MEMORY_MATCH_MISMATCH_DELAY", "soon")

        with pytest.raises(ConfigurationError) as exc_info:
            CoordinatorConfig.from_env()

        assert "must be numbers" in exc_info.value.message

    def test_from_env_rejects_negative_delay(self, monkeypatch):
        monkeypatch.setenv("MEMORY_MATCH_WIGGLE_DELAY", "-1")

        with pytest.raises(MemoryMatchException):
            CoordinatorConfig.from_env()

    def test_negative_delay_fails_validation(self):
        with pytest.raises(ValueError):
            CoordinatorConfig(celebration_delay=-0.1)
