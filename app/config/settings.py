from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", protected_namespaces=("settings_",)
    )

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docprocessor"
    db_username: str = "docprocessor"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    storage_root: str = "uploads"
    storage_delete_max_retries: int = 3
    storage_delete_retry_delay_ms: int = 500

    max_content_length: int = 50000
    csv_sample_rows: int = 100
    pdf_engine: str = "pdfplumber"

    worker_count: int = 3
    max_concurrency: int = 3
    queue_poll_interval_seconds: float = 1.0
    document_timeout_seconds: int = 600
    stuck_document_timeout_minutes: int = 30
    recovery_scan_interval_seconds: float = 300
    fail_on_ai_error: bool = False

    model_provider: str = "openai"
    model_api_key: str = ""
    model_base_url: str = ""
    classification_model_id: str = "gpt-4o-mini"
    summarization_model_id: str = "gpt-4o-mini"
    model_timeout_seconds: int = 30
    model_max_retries: int = 3
    model_retry_delay_ms: int = 1000
    model_max_tokens: int = 2000
    model_temperature: float = 0.3
    model_top_p: float = 0.9
