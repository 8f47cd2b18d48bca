from pydantic_settings import BaseSettings, SettingsConfigDict

from core.constants import CLIENT_TITLE, ENDPOINT_PATH


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    client_title: str = CLIENT_TITLE

    lookup_endpoint: str = ENDPOINT_PATH
    lookup_timeout: float = 30.0
    lookup_user_agent: str = "AcronymLookup Client"

    debug: bool = False


settings = Settings()


def get_settings() -> Settings:
    return settings
