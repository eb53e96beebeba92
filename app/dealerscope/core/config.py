from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    APP_NAME: str = "DealerScope"
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite+pysqlite:///./dealerscope.db"
    DEFAULT_GROUP_NAME: str = "Default Group"
    DEFAULT_STORE_NAME: str = "Default Store"
    DEFAULT_DEPARTMENTS: str = "Parts,Sales,Service"
    SUPERADMIN_EMAIL: str = "superadmin@example.com"
    SUPERADMIN_FULL_NAME: str = "Super Admin"
    SUPERADMIN_PASSWORD: str = "change-me"
    KPI_AT_RISK_TOLERANCE: float = 10.0


settings = Settings()
