from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 10000
    log_level: str = "INFO"

    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""
    token_uri: str = "https://oauth2.googleapis.com/token"

    share_publicly: bool = True
    keepalive_interval: float = 30.0
    list_page_size: int = 20
    list_order_by: str = "createdTime desc"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret and self.refresh_token)


@lru_cache
def get_settings() -> Settings:
    return Settings()
