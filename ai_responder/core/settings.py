from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_DEFAULT_RESPONDER_SYSTEM_PROMPT = (
    "You are an AI assistant taking part in a team chat channel. Answer the latest user message "
    "directly, keep replies concise and well structured, use markdown where it helps readability, "
    "and say so plainly when you do not know something instead of guessing."
)


class Settings(BaseSettings):
    """Runtime configuration loaded from env vars and local env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = Field(default="local", alias="APP_ENV")
    log_level: str | None = Field(default=None, alias="LOG_LEVEL")

    responder_flush_interval_seconds: float = Field(default=1.0, gt=0, alias="RESPONDER_FLUSH_INTERVAL_SECONDS")
    responder_error_fallback_text: str = Field(
        default="Error generating the message",
        alias="RESPONDER_ERROR_FALLBACK_TEXT",
    )
    responder_system_prompt: str = Field(
        default=_DEFAULT_RESPONDER_SYSTEM_PROMPT,
        alias="RESPONDER_SYSTEM_PROMPT",
    )

    main_agent_model: str = Field(default="gpt-5.2", alias="MAIN_AGENT_MODEL")
    main_agent_temperature: float = Field(default=0.0, alias="MAIN_AGENT_TEMPERATURE")
    main_agent_use_mock: bool = Field(default=False, alias="MAIN_AGENT_USE_MOCK")
    main_agent_mock_messages_file: str = Field(
        default="mock-data/assistant-messages.md",
        alias="MAIN_AGENT_MOCK_MESSAGES_FILE",
    )
    main_agent_mock_sleep_seconds: float | None = Field(default=None, alias="MAIN_AGENT_MOCK_SLEEP_SECONDS")
    main_agent_model_provider_base_url: str | None = Field(default=None, alias="MAIN_AGENT_MODEL_PROVIDER_BASE_URL")
    main_agent_model_provider_api_key: str | None = Field(default=None, alias="MAIN_AGENT_MODEL_PROVIDER_API_KEY")

    chat_backend_use_mock: bool = Field(default=False, alias="CHAT_BACKEND_USE_MOCK")
    chat_backend_base_url: str = Field(default="http://localhost:18080/api", alias="CHAT_BACKEND_BASE_URL")
    chat_backend_api_key: str | None = Field(default=None, alias="CHAT_BACKEND_API_KEY")
    chat_backend_timeout_seconds: float = Field(default=10.0, alias="CHAT_BACKEND_TIMEOUT_SECONDS")

    @property
    def enable_swagger(self) -> bool:
        return self.app_env.lower() == "local"

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.app_env.lower() == "local" else "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
