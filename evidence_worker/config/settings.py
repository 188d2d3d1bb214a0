from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "legal_evidence"
    db_username: str = "legal_evidence"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 5

    job_poll_interval_seconds: int = 3
    stale_job_timeout_seconds: int = 900

    pdf_engine: str = "pdfplumber"

    storage_root: str = "."
    artifacts_dir: str = "uploads/pdf-pro"
