from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # Database Configuration
    database_url: str = Field("sqlite://db.sqlite3", description="Tortoise ORM database URL")

    # Application Configuration
    app_name: str = Field("scimfilter", description="Application name")
    environment: str = Field("development", description="Environment (development, staging, production)")
    debug: bool = Field(False, description="Debug mode")
    log_level: str = Field("INFO", description="Logging level")

    # Pagination
    default_page_size: int = Field(100, description="Default page size")
    max_page_size: int = Field(200, description="Maximum page size")

    @field_validator("environment")
    def validate_environment(cls, v: str) -> str:
        allowed = ["development", "staging", "production"]
        if v not in allowed:
            raise ValueError(f"Environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    def validate_log_level(cls, v: str) -> str:
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def tortoise_orm_config(self) -> dict:
        return {
            "connections": {"default": self.database_url},
            "apps": {
                "models": {
                    "models": ["scimfilter.models"],
                    "default_connection": "default",
                }
            },
            "use_tz": True,
            "timezone": "UTC",
        }


# Create a singleton instance
settings = Settings()
