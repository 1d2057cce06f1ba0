"""Essential configuration tests."""

import tempfile
from pathlib import Path

import pytest
from pydantic import ValidationError

from mkvcon.config import MAKEMKVCON_ENV, MkvconConfig, create_sample_config, load_config


@pytest.fixture
def temp_dir():
    """Create temporary directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def clear_makemkvcon_env(monkeypatch):
    monkeypatch.delenv(MAKEMKVCON_ENV, raising=False)


class TestConfigBasics:
    """Test essential configuration functionality."""

    def test_default_config(self):
        """Test default configuration values."""
        config = MkvconConfig()

        assert config.makemkv_con == "makemkvcon"
        assert config.info_timeout == 60
        assert config.rip_timeout == 3600
        assert config.default_disc_index == 0
        assert config.default_cache is None
        assert config.log_dir is None

    def test_makemkvcon_from_environment(self, monkeypatch):
        """The environment supplies the binary when the config does not."""
        monkeypatch.setenv(MAKEMKVCON_ENV, "/opt/makemkv/bin/makemkvcon")

        assert MkvconConfig().makemkv_con == "/opt/makemkv/bin/makemkvcon"
        assert MkvconConfig(makemkvcon_path="/usr/bin/makemkvcon").makemkv_con == (
            "/usr/bin/makemkvcon"
        )

    @pytest.mark.parametrize("value", [None, ""])
    def test_makemkvcon_path_always_resolved(self, value):
        """An unset path is filled in on the model itself, not only by the property."""
        config = MkvconConfig(makemkvcon_path=value)

        assert config.makemkvcon_path == "makemkvcon"
        assert config.makemkv_con == config.makemkvcon_path

    def test_path_expansion(self):
        """Log directory paths are expanded."""
        config = MkvconConfig(log_dir="~/mkvcon/logs")

        assert "~" not in str(config.log_dir)
        assert config.log_dir.is_absolute()

    def test_timeout_for_command(self):
        config = MkvconConfig(info_timeout=30, rip_timeout=600)

        assert config.timeout_for("info") == 30
        assert config.timeout_for("mkv") == 600
        assert config.timeout_for("backup") == 600
        assert config.timeout_for("stream") is None

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"info_timeout": 0},
            {"rip_timeout": -1},
            {"default_disc_index": -1},
            {"default_cache": 0},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            MkvconConfig(**kwargs)


class TestConfigLoading:
    """Test configuration loading from files."""

    def test_load_config_defaults(self, temp_dir, monkeypatch):
        """Defaults are used when no config file exists."""
        monkeypatch.setattr(
            "mkvcon.config.default_config_paths",
            lambda: [temp_dir / "missing.toml"],
        )

        config = load_config()

        assert config == MkvconConfig()

    def test_config_file_loading(self, temp_dir):
        """Test loading configuration from TOML file."""
        config_file = temp_dir / "config.toml"
        config_file.write_text(
            """
makemkvcon_path = "custom_makemkvcon"
info_timeout = 120
default_cache = 1024
""",
        )

        config = load_config(config_file)

        assert config.makemkv_con == "custom_makemkvcon"
        assert config.info_timeout == 120
        assert config.default_cache == 1024
        assert config.rip_timeout == 3600

    def test_config_found_in_search_path(self, temp_dir, monkeypatch):
        config_file = temp_dir / "mkvcon.toml"
        config_file.write_text("default_disc_index = 1\n")
        monkeypatch.setattr(
            "mkvcon.config.default_config_paths",
            lambda: [temp_dir / "missing.toml", config_file],
        )

        assert load_config().default_disc_index == 1

    def test_sample_config_loads(self, temp_dir):
        """The generated sample is a valid configuration."""
        path = temp_dir / "nested" / "config.toml"

        create_sample_config(path)
        config = load_config(path)

        assert path.exists()
        assert config.info_timeout == 60
        assert config.default_disc_index == 0
