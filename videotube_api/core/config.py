# videotube_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "videotube_api"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 5000

    mongo_dsn: str = Field(
        default="mongodb://mongo:27017/videotube",
        alias="MONGO_DSN"
    )
    mongo_db: str = "videotube"

    jwt_secret: str = Field(default="change-me-in-production",
                            alias="JWT_SECRET")
    jwt_algorithm: str = "HS256"
    # 7 days
    jwt_expires_minutes: int = Field(default=60 * 24 * 7,
                                     alias="JWT_EXPIRES_MINUTES")
    bcrypt_rounds: int = 12

    client_url: str = Field(default="http://localhost:5173",
                            alias="CLIENT_URL")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_test_enabled: bool = Field(default=False,
                                      alias="SENTRY_TEST_ENABLED")

    model_config = SettingsConfigDict(env_file="infra/.env", extra="ignore")


settings = Settings()
