"""Configuration models."""

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PromptConfig(BaseModel):
    """Prompt template configuration."""

    system_prompt: str
    user_prompt_template: str = "{content}"
    output_schema: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class Config(BaseSettings):
    """Main application configuration from environment variables."""

    # Generation backend (any OpenAI-compatible endpoint)
    openai_api_key: str = Field(..., min_length=1)
    openai_base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    max_output_tokens: Optional[int] = Field(default=None, gt=0)

    # Prompt templates
    config_dir: Path = Path("./config")
    prompt_name: str = "news_parser"

    # Sources
    sources: str = "cnn,npr"
    request_timeout_sec: int = Field(default=30, gt=0)

    # Enrichment
    max_concurrency: int = Field(default=12, gt=0)
    max_retries: int = Field(default=5, ge=0)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    retry_max_delay: float = Field(default=30.0, ge=0.0)
    retry_max_jitter: float = Field(default=0.25, ge=0.0)

    # Output
    json_output_dir: Path = Path("./out/json")
    markdown_output_dir: Path = Path("./out/markdown")

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "json"
    log_dir: Optional[Path] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def source_list(self) -> List[str]:
        """Get the configured source names."""
        return [s.strip().lower() for s in self.sources.split(",") if s.strip()]

    def validate_paths(self) -> None:
        """Create the output and log directories."""
        self.json_output_dir.mkdir(parents=True, exist_ok=True)
        self.markdown_output_dir.mkdir(parents=True, exist_ok=True)

        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)
