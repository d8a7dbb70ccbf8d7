"""Plant Doctor settings, loaded with pydantic-settings.

Every tunable lives here, read once at import time.
Settings are grouped by the part of the service they control:

- store: Where saved diagnostics live (in-memory or a JSON file)
- tracker: How open diagnostics are prioritized on the dashboard
- llm: LLM settings for care profile enrichment
- observability: Langfuse tracing

Environment variables use `__` as nested delimiter:
    STORE__BACKEND=json
    TRACKER__HIGH_AFTER_DAYS=10
    LLM__TEMPERATURE=0.5

Or set them in .env file.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# NESTED SETTINGS MODELS
# =============================================================================
# Plain Pydantic models (not BaseSettings), composed into Settings below
# so each env var group maps to one object.


class StoreSettings(BaseModel):
    """Diagnostic record store settings."""

    backend: Literal["memory", "json"] = Field(
        default="memory",
        description="Store implementation: 'memory' (lost on restart) or 'json' (file-backed)",
    )
    json_path: Path = Field(
        default=Path("data/diagnostics.json"),
        description="File used by the JSON store",
    )


class TrackerSettings(BaseModel):
    """Open-diagnostic tracker settings.

    An unresolved diagnostic grows more urgent the longer it stays open.
    Critical symptoms escalate it to 'critical' once it is
    `medium_after_days` old.
    """

    medium_after_days: int = Field(
        default=3,
        description="Days open before an unresolved diagnostic is medium priority",
        ge=1,
    )
    high_after_days: int = Field(
        default=7,
        description="Days open before an unresolved diagnostic is high priority",
        ge=1,
    )
    critical_symptoms: list[str] = Field(
        default_factory=lambda: ["root-rot", "black-stem-base", "soft-mushy-stem"],
        description="Symptoms that make a lingering diagnostic critical",
    )
    dashboard_limit: int = Field(
        default=3,
        description="How many open diagnostics the dashboard shows by default",
        ge=1,
        le=50,
    )

    @model_validator(mode="after")
    def _check_tiers(self) -> "TrackerSettings":
        if self.high_after_days < self.medium_after_days:
            raise ValueError(
                f"high_after_days ({self.high_after_days}) must be >= "
                f"medium_after_days ({self.medium_after_days})"
            )
        return self


class LLMSettings(BaseModel):
    """LLM generation settings.

    These control how the language model generates care profiles.
    """

    model: str = Field(
        default="gpt-4o-mini",
        description="OpenAI model for generation",
    )
    temperature: float = Field(
        default=0.3,
        description="Sampling temperature (lower = more deterministic)",
        ge=0.0,
        le=2.0,
    )
    max_completion_tokens: int = Field(
        default=1500,
        description="Maximum tokens in the response",
        ge=100,
        le=4000,
    )


class ObservabilitySettings(BaseModel):
    """Langfuse observability settings.

    When enabled, LLM calls and API endpoints are traced to Langfuse.
    When disabled (default), everything is a no-op with zero overhead.

    Env vars: OBSERVABILITY__ENABLED=true, OBSERVABILITY__LANGFUSE_PUBLIC_KEY=pk-...
    """

    enabled: bool = Field(
        default=False,
        description="Enable Langfuse tracing (requires valid keys)",
    )
    langfuse_public_key: str = Field(
        default="",
        description="Langfuse public key (pk-...)",
    )
    langfuse_secret_key: str = Field(
        default="",
        description="Langfuse secret key (sk-...)",
    )
    langfuse_base_url: str = Field(
        default="https://cloud.langfuse.com",
        description="Langfuse base URL",
    )


# =============================================================================
# MAIN SETTINGS CLASS
# =============================================================================


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Nested settings can be overridden with `__` delimiter:
        STORE__BACKEND=json
        TRACKER__DASHBOARD_LIMIT=5

    Or in .env file:
        OPENAI_API_KEY=sk-...
        STORE__JSON_PATH=/var/lib/plant-doctor/diagnostics.json
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # API Keys
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key (only needed for care profile enrichment)",
    )

    # App metadata
    app_name: str = Field(
        default="Plant Doctor",
        description="Application name",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Nested settings groups
    store: StoreSettings = Field(default_factory=StoreSettings)
    tracker: TrackerSettings = Field(default_factory=TrackerSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


# Shared instance; modules import this rather than building their own
settings = Settings()
