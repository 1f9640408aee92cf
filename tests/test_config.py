"""
Tests for settings loading.

Tests cover:
- CLI > ENV precedence
- Missing required settings
- Parallelism validation and default
"""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from vol_dispatch import config
from vol_dispatch.config import BatchSettings, default_parallelism, load_settings
from vol_dispatch.exceptions import ConfigError

ALL_ENV = (
    config.ENV_TOOL,
    config.ENV_IMAGE,
    config.ENV_MODULES,
    config.ENV_OUTPUT_DIR,
    config.ENV_PARALLELISM,
    config.ENV_LOG_LEVEL,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ALL_ENV:
        monkeypatch.delenv(name, raising=False)


class TestLoadSettings:
    """Tests for load_settings()"""

    def test_cli_values(self):
        """All values from CLI flags."""
        settings = load_settings("vol", "img.raw", "modules.txt", "out", 3)

        assert settings.tool_path == "vol"
        assert settings.image_path == "img.raw"
        assert settings.modules_path == "modules.txt"
        assert settings.output_dir == "out"
        assert settings.effective_parallelism == 3

    def test_env_fallback(self, monkeypatch):
        """Environment variables fill in missing flags."""
        monkeypatch.setenv(config.ENV_TOOL, "/opt/vol")
        monkeypatch.setenv(config.ENV_IMAGE, "/cases/img.raw")
        monkeypatch.setenv(config.ENV_MODULES, "/cases/modules.txt")
        monkeypatch.setenv(config.ENV_OUTPUT_DIR, "/cases/out")
        monkeypatch.setenv(config.ENV_PARALLELISM, "4")

        settings = load_settings()

        assert settings.tool_path == "/opt/vol"
        assert settings.parallelism == 4

    def test_cli_overrides_env(self, monkeypatch):
        """CLI flags win over environment variables."""
        monkeypatch.setenv(config.ENV_TOOL, "/opt/vol")
        monkeypatch.setenv(config.ENV_PARALLELISM, "4")

        settings = load_settings("/usr/bin/vol", "img", "mods", "out", 2)

        assert settings.tool_path == "/usr/bin/vol"
        assert settings.parallelism == 2

    def test_missing_required(self):
        """Missing required settings are all reported."""
        with pytest.raises(ConfigError, match="Missing: -i, -o"):
            load_settings(cli_tool="vol", cli_modules="mods")

    @pytest.mark.parametrize("value", [0, -1])
    def test_parallelism_below_one(self, value):
        """Parallelism must be at least 1."""
        with pytest.raises(ConfigError, match="parallelism"):
            load_settings("vol", "img", "mods", "out", value)

    def test_parallelism_not_a_number(self, monkeypatch):
        """Non-numeric parallelism from the environment is rejected."""
        monkeypatch.setenv(config.ENV_PARALLELISM, "many")

        with pytest.raises(ConfigError, match="parallelism"):
            load_settings("vol", "img", "mods", "out")

    def test_blank_value_rejected(self):
        """Whitespace-only paths are rejected."""
        with pytest.raises(ConfigError, match="tool_path"):
            load_settings("   ", "img", "mods", "out")


class TestParallelism:
    """Tests for default parallelism."""

    @pytest.mark.parametrize("cpus,expected", [(8, 7), (2, 1), (1, 1), (None, 1)])
    def test_default_parallelism(self, cpus, expected):
        """CPU count minus one, floor 1."""
        with patch("vol_dispatch.config.os.cpu_count", return_value=cpus):
            assert default_parallelism() == expected

    def test_effective_parallelism_uses_default(self):
        """No override means the CPU-based default."""
        settings = BatchSettings(tool_path="vol", image_path="img", modules_path="m", output_dir="o")

        with patch("vol_dispatch.config.os.cpu_count", return_value=4):
            assert settings.effective_parallelism == 3

    def test_extra_fields_forbidden(self):
        """Unknown settings are rejected."""
        with pytest.raises(ValidationError):
            BatchSettings(tool_path="vol", image_path="img", modules_path="m", output_dir="o", bogus=1)
