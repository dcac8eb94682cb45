"""Pydantic configuration models for note-copilot."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from shared_types import ChatMode


class PathsConfig(BaseModel):
    """File paths configuration."""

    data_db: Path = Path("~/copilot/copilot.db")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.data_db = self.data_db.expanduser()
        return self


class KnowledgeConfig(BaseModel):
    """Knowledge store bounds and retention."""

    max_actions: int = Field(default=50, ge=1)
    max_memories: int = Field(default=100, ge=1)
    retention_days: int = Field(default=30, ge=1)
    context_limit: int = Field(default=5, ge=1)


class ConversationConfig(BaseModel):
    """Conversation history bounds and defaults."""

    default_mode: ChatMode = ChatMode.GENERAL
    max_history: int = Field(default=20, ge=2)
    trimmed_history: int = Field(default=15, ge=1)
    persist_history: bool = True

    @model_validator(mode="after")
    def validate_trim(self):
        if self.trimmed_history > self.max_history:
            raise ValueError(
                f"trimmed_history ({self.trimmed_history}) must not exceed max_history ({self.max_history})"
            )
        return self


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class CopilotConfig(BaseModel):
    """Main configuration model."""

    paths: PathsConfig = Field(default_factory=PathsConfig)
    knowledge: KnowledgeConfig = Field(default_factory=KnowledgeConfig)
    conversation: ConversationConfig = Field(default_factory=ConversationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "CopilotConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
