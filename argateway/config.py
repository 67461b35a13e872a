from pydantic_settings import BaseSettings

DEFAULT_GATEWAY_URL = "https://arweave.net"


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    cache_dir: str = "./cache"
    key_file: str = "./key.store"
    stats_file: str = "./stats-cache.json"

    gateway_url: str = DEFAULT_GATEWAY_URL
    backup_gateway_url: str = DEFAULT_GATEWAY_URL
    request_timeout: float = 30.0

    max_upload_bytes: int = 3 * 1024 * 1024
    explorer_url: str = "https://viewblock.io/arweave"
    page_theme: str = "dark"

    @property
    def primary_url(self) -> str:
        return self.gateway_url.rstrip("/")

    @property
    def backup_url(self) -> str:
        return self.backup_gateway_url.rstrip("/")

    model_config = {"env_prefix": "ARGATEWAY_", "env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
