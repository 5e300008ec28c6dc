"""Configuration settings for ChronoCron."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Scheduler
    scheduler_job_defaults: dict = {
        "coalesce": True,
        "max_instances": 1,
        "misfire_grace_time": None  # a late fire still runs
    }

    # Re-check interval when no run falls within the search horizon
    retry_delay_seconds: int = 60 * 60

    # Logging
    log_level: str = "INFO"
    log_file: str = ""

    class Config:
        env_prefix = "CHRONOCRON_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
