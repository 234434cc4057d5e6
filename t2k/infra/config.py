"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./t2k_core.db"

    # Task checks
    show_task_check_options: bool = False  # when True, the dialog is opt-out instead of opt-in
    default_roll_mode: str = "publicroll"
    cuf_title: str = "Coolness Under Fire"

    # App
    app_debug: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
