from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Description text
    DESCRIPTION_HEADING: str = "*Validation Rules*"
    TOTAL_LENGTH_PLACEHOLDER: str = "x"  # no runtime value exists at schema-generation time

    # Include traversal
    GUARD_INCLUDE_CYCLES: bool = True

    @property
    def description_title(self) -> str:
        return f"\n\n{self.DESCRIPTION_HEADING}\n\n"

    model_config = SettingsConfigDict(env_prefix="SCHEMA_RULES_", env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()
