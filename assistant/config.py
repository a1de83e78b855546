"""Assistant configuration — alert store, reasoning engine and tuning knobs."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "ASSISTANT_"}

    # LLM
    llm_provider: str = "openai"
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_model: str = "gpt-4o"
    llm_temperature: float = 0.2
    # None keeps the engine call unbounded
    engine_timeout_seconds: float | None = None

    # Alert store (ClickHouse HTTP interface)
    clickhouse_url: str = "http://clickhouse:8123"
    clickhouse_database: str = "default"
    clickhouse_user: str = "default"
    clickhouse_password: str = ""
    alerts_table: str = "alerts"
    store_timeout_seconds: float = 30.0

    # Dashboard
    dashboard_timezone: str = "Asia/Kuala_Lumpur"
    recent_alerts_limit: int = 100

    # Conversation tuning
    history_window_turns: int = 10
    transcript_read_limit: int = 50

    # Server
    host: str = "0.0.0.0"
    port: int = 4000


settings = Settings()
