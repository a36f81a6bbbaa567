"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from budget_planner.domain.budget import ON_TRACK_LABEL
from budget_planner.domain.models import GoalAllocation


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Database
    database_url: str = "sqlite:///./budget_planner.db"

    # Service
    service_name: str = "budget-planner"
    log_level: str = "INFO"

    # Analysis
    budget_on_track_label: str = ON_TRACK_LABEL  # or "Within Budget"
    goal_allocation: GoalAllocation = GoalAllocation.INDEPENDENT


settings = Settings()
