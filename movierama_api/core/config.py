# movierama_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "movierama_api"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/movierama?replicaSet=rs0",
        alias="MONGO_DSN"
    )
    mongo_db: str = "movierama"
    # multi-document transactions need a replica set
    mongo_use_transactions: bool = Field(default=True,
                                         alias="MONGO_USE_TRANSACTIONS")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_test_enabled: bool = Field(default=False,
                                      alias="SENTRY_TEST_ENABLED")
    model_config = SettingsConfigDict(env_file="infra/.env", extra="ignore",
                                      populate_by_name=True)


settings = Settings()
