from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_NAME: str = "querykit"
    LOG_LEVEL: str = "INFO"

    DEFAULT_PAGE_SIZE: int = 50
    # 0 disables the cap and lets pageSize=0 return every row.
    MAX_PAGE_SIZE: int = 500
    # Upper bound for raw filter / orderBy query parameters.
    MAX_FILTER_LENGTH: int = 2048


settings = Settings()
