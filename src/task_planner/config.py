"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    environment: str = "development"
    debug: bool = False
    service_name: str = "task-planner"

    # CORS
    cors_origins: list[str] = ["*"]

    # Natural language input
    max_input_length: int = 1000

    # Session handling lives outside this service; every request acts as this user
    default_user_id: int = 1

    class Config:
        env_prefix = "TASK_PLANNER_"
        case_sensitive = False


settings = Settings()
