"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from cli.config import load_config_model
from cli.config_models import CopilotConfig
from shared_types import ChatMode


def _write(tmp_path, text):
    path = tmp_path / "config.yaml"
    path.write_text(text)
    return path


class TestDefaults:
    def test_defaults(self):
        config = CopilotConfig()
        assert config.knowledge.max_actions == 50
        assert config.knowledge.max_memories == 100
        assert config.conversation.max_history == 20
        assert config.conversation.trimmed_history == 15
        assert config.conversation.default_mode == ChatMode.GENERAL
        assert config.logging.level == "WARNING"

    def test_paths_expanded(self):
        config = CopilotConfig.from_dict({"paths": {"data_db": "~/x/copilot.db"}})
        assert config.paths.data_db == Path.home() / "x" / "copilot.db"

    def test_to_dict_round_trip(self):
        config = CopilotConfig.from_dict({"knowledge": {"retention_days": 7}})
        assert CopilotConfig.from_dict(config.to_dict()) == config


class TestLoadConfigModel:
    def test_loads_yaml(self, tmp_path):
        path = _write(
            tmp_path,
            "conversation:\n  default_mode: creative\n  max_history: 10\n  trimmed_history: 6\n"
            "logging:\n  level: debug\n",
        )
        config = load_config_model(path)
        assert config.conversation.default_mode == ChatMode.CREATIVE
        assert config.conversation.max_history == 10
        assert config.logging.level == "DEBUG"

    def test_empty_file(self, tmp_path):
        config = load_config_model(_write(tmp_path, ""))
        assert config == CopilotConfig()

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config_model(_write(tmp_path, "knowledge: [unclosed"))

    def test_invalid_level(self, tmp_path):
        with pytest.raises(ValueError, match="Config validation failed"):
            load_config_model(_write(tmp_path, "logging:\n  level: LOUD\n"))

    def test_trim_larger_than_max(self, tmp_path):
        with pytest.raises(ValueError, match="trimmed_history"):
            load_config_model(_write(tmp_path, "conversation:\n  max_history: 5\n  trimmed_history: 8\n"))

    def test_unknown_mode(self, tmp_path):
        with pytest.raises(ValueError):
            load_config_model(_write(tmp_path, "conversation:\n  default_mode: sleepy\n"))
