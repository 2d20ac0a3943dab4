"""
Tests for configuration and environment overrides.
"""

from questree.config import COMPLETION_MARKER_ID, PERSISTENCE_FILE_NAME, ControllerConfig, RunnerConfig


class TestControllerConfig:
    """Tests for ControllerConfig."""

    def test_defaults(self):
        config = ControllerConfig()
        assert config.resume_enters_root is True
        assert config.store_completion_marker is True
        assert config.completion_marker_id == COMPLETION_MARKER_ID

    def test_dict_round_trip(self):
        config = ControllerConfig(resume_enters_root=False, completion_marker_id="done")
        assert ControllerConfig.from_dict(config.to_dict()) == config


class TestRunnerConfig:
    """Tests for RunnerConfig."""

    def test_defaults(self):
        config = RunnerConfig()
        assert config.persistence_file == PERSISTENCE_FILE_NAME
        assert config.autofill is False
        assert config.controller == ControllerConfig()

    def test_title_resolution(self):
        assert RunnerConfig(title="Mine").resolve_title("Definition") == "Mine"
        assert RunnerConfig().resolve_title("Definition") == "Definition"
        assert RunnerConfig().resolve_title(None) == "A short questionnaire"

    def test_dict_round_trip(self):
        config = RunnerConfig(persistence_file="x.tmp", autofill=True, controller=ControllerConfig(False))
        assert RunnerConfig.from_dict(config.to_dict()) == config

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("QUESTREE_PERSISTENCE_FILE", "/tmp/answers.tmp")
        monkeypatch.setenv("QUESTREE_AUTOFILL", "yes")
        monkeypatch.setenv("QUESTREE_LOG_LEVEL", "debug")

        config = RunnerConfig.from_env()
        assert config.persistence_file == "/tmp/answers.tmp"
        assert config.autofill is True
        assert config.log_level == "DEBUG"

    def test_overrides_win_over_env(self, monkeypatch):
        monkeypatch.setenv("QUESTREE_AUTOFILL", "1")
        monkeypatch.delenv("QUESTREE_PERSISTENCE_FILE", raising=False)

        config = RunnerConfig.from_env(autofill=False, persistence_file=None)
        assert config.autofill is False
        assert config.persistence_file == PERSISTENCE_FILE_NAME
