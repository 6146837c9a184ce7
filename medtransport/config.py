# medtransport/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, AliasChoices


class Settings(BaseSettings):
    # читаем .env, не падаем на лишние ключи
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # Хранилище. По умолчанию каждая сборка реестров получает свою in-memory базу
    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"
    SQL_ECHO: bool = False

    # Логи
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "MEDTRANSPORT_LOG_LEVEL"),
    )


settings = Settings()
