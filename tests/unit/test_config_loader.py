# tests/unit/test_config_loader.py
"""Unit tests for YAML configuration loading."""

from pathlib import Path

import pytest

from newsdesk.services.config_loader import load_prompt_config, load_yaml
from newsdesk.utils.exceptions import ConfigurationError

PROJECT_CONFIG = Path(__file__).resolve().parents[2] / "config"


def write_prompt(config_dir: Path, name: str, body: str) -> None:
    prompts = config_dir / "prompts"
    prompts.mkdir(parents=True, exist_ok=True)
    (prompts / f"{name}.yaml").write_text(body, encoding="utf-8")


@pytest.mark.unit
class TestLoadPromptConfig:
    """Tests for load_prompt_config function."""

    def test_loads_template(self, tmp_path):
        """Should read system prompt, template and schema."""
        write_prompt(
            tmp_path,
            "custom",
            "system_prompt: Be brief.\n"
            "user_prompt_template: 'Article: {content}'\n"
            "output_schema:\n  type: object\n",
        )

        prompt = load_prompt_config("custom", tmp_path)

        assert prompt.system_prompt == "Be brief."
        assert prompt.user_prompt_template == "Article: {content}"
        assert prompt.output_schema == {"type": "object"}

    def test_shipped_prompt_is_valid(self):
        """Should load the bundled news_parser prompt."""
        prompt = load_prompt_config("news_parser", PROJECT_CONFIG)

        assert "{content}" in prompt.user_prompt_template
        assert "summaryOfNewsArticle" in prompt.output_schema["properties"]

    def test_missing_file(self, tmp_path):
        """Should raise ConfigurationError for a missing prompt."""
        with pytest.raises(ConfigurationError, match="not found"):
            load_prompt_config("absent", tmp_path)

    def test_missing_system_prompt(self, tmp_path):
        """Should raise ConfigurationError when required keys are missing."""
        write_prompt(tmp_path, "broken", "user_prompt_template: '{content}'\n")
        with pytest.raises(ConfigurationError, match="Invalid prompt"):
            load_prompt_config("broken", tmp_path)


@pytest.mark.unit
class TestLoadYaml:
    """Tests for load_yaml function."""

    def test_invalid_yaml(self, tmp_path):
        """Should raise ConfigurationError on a syntax error."""
        path = tmp_path / "bad.yaml"
        path.write_text("key: [unclosed\n", encoding="utf-8")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_yaml(path)

    def test_non_mapping(self, tmp_path):
        """Should reject a top-level list."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            load_yaml(path)

    def test_empty_file(self, tmp_path):
        """Should treat an empty file as an empty mapping."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_yaml(path) == {}
