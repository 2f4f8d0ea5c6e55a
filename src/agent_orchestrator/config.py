"""Configuration module for agent-orchestrator using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AgentOrchestratorSettings(BaseSettings):
    """Main configuration settings for agent-orchestrator.

    All settings can be overridden via environment variables with the
    AGENT_ORCH_ prefix. For example, AGENT_ORCH_OLLAMA_HOST will override the
    ollama_host setting.
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Ollama
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    ollama_timeout: float = 60.0

    # History endpoints return at most this many entries when no limit is given
    default_history_limit: int = Field(default=100, ge=0)

    # Startup hook that registers agents and pipelines ("package.module:function")
    registry_setup: str | None = None

    # CORS
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="AGENT_ORCH_")
