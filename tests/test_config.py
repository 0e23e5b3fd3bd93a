"""Tests for configuration loading and validation."""

import pytest

from codebase_metrics.config import AnalysisConfig, load_config
from codebase_metrics.exceptions import ConfigurationError, InvalidConfigError


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert config.workers is None
        assert config.effective_workers >= 1
        assert config.timeout_seconds == 30
        assert config.max_tree_depth == 5000
        assert config.skip_dirs == ["node_modules", ".git"]
        assert config.log_file is None
        assert config.lint_enabled
        assert config.folder_name == "codebase"

    def test_max_file_size_bytes(self):
        assert AnalysisConfig(max_file_size_mb=1.0).max_file_size_bytes == 1024 * 1024

    @pytest.mark.parametrize(
        "field,value",
        [
            ("workers", 0),
            ("timeout_seconds", 0),
            ("max_tree_depth", 0),
            ("max_file_size_mb", 0),
            ("lint_timeout_seconds", 0),
            ("folder_name", "a/b"),
            ("verbosity", "loud"),
        ],
    )
    def test_invalid_values(self, field, value):
        with pytest.raises(InvalidConfigError) as exc_info:
            AnalysisConfig(**{field: value})
        assert exc_info.value.key == field

    def test_empty_lint_command_only_matters_when_linting(self):
        AnalysisConfig(lint_enabled=False, lint_command=[])
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(lint_command=[])


class TestLoadConfig:
    def test_overrides(self):
        config = load_config(workers=3, lint_enabled=False)
        assert config.workers == 3
        assert not config.lint_enabled

    def test_none_overrides_ignored(self):
        assert load_config(workers=None).workers is None

    def test_verbosity_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"

    def test_config_file(self, tmp_path):
        path = tmp_path / "cfg.toml"
        path.write_text('workers = 2\nfolder_name = "web"\nskip_dirs = ["out"]\n')
        config = load_config(config_file=path)
        assert config.workers == 2
        assert config.folder_name == "web"
        assert config.skip_dirs == ["out"]

    def test_analysis_section(self, tmp_path):
        path = tmp_path / "cfg.toml"
        path.write_text("[analysis]\ntimeout_seconds = 5\n")
        assert load_config(config_file=path).timeout_seconds == 5

    def test_cli_beats_file(self, tmp_path):
        path = tmp_path / "cfg.toml"
        path.write_text("workers = 2\n")
        assert load_config(config_file=path, workers=6).workers == 6

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("CODEBASE_METRICS_WORKERS", "5")
        monkeypatch.setenv("CODEBASE_METRICS_LINT_ENABLED", "off")
        monkeypatch.setenv("CODEBASE_METRICS_LINT_COMMAND", "node, eslint.js")
        config = load_config()
        assert config.workers == 5
        assert not config.lint_enabled
        assert config.lint_command == ["node", "eslint.js"]

    def test_logging_settings_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CODEBASE_METRICS_VERBOSITY", "verbose")
        monkeypatch.setenv("CODEBASE_METRICS_LOG_FILE", str(tmp_path / "run.log"))
        config = load_config()
        assert config.verbosity == "verbose"
        assert config.log_file == str(tmp_path / "run.log")

    def test_bad_env_value(self, monkeypatch):
        monkeypatch.setenv("CODEBASE_METRICS_ENABLE_JSX", "maybe")
        with pytest.raises(InvalidConfigError):
            load_config()

    def test_global_config_from_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        (tmp_path / ".codebase-metrics.toml").write_text("max_tree_depth = 100\n")
        assert load_config().max_tree_depth == 100

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_malformed_toml(self, tmp_path):
        path = tmp_path / "cfg.toml"
        path.write_text("workers = = 2\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "cfg.toml"
        path.write_text("colour = 'red'\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(config_file=path)

    def test_invalid_value_in_file(self, tmp_path):
        path = tmp_path / "cfg.toml"
        path.write_text("workers = 0\n")
        with pytest.raises(InvalidConfigError):
            load_config(config_file=path)
