from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


def choose_env_file() -> str:
    return ".env.local" if Path(".env.local").exists() else ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=choose_env_file(),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # tolerate unrelated env vars
    )

    # Content directory
    CONTENT_DIR: str = "posts"
    VELOG_SUBDIR: str = "velog"
    POST_EXTENSION: str = ".mdx"

    # Velog
    VELOG_USERNAME: str = ""
    VELOG_GRAPHQL_URL: str = "https://v2cdn.velog.io/graphql"
    VELOG_LIST_LIMIT: int = 20
    VELOG_CACHE_TTL_SECONDS: float = 3600
    VELOG_TIMEOUT_SECONDS: float = 10.0
    LIVE_MERGE_VELOG: bool = False

    # Sync
    SYNC_MAX_POSTS: int = 100
    SYNC_DELAY_SECONDS: float = 0.5

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def content_path(self) -> Path:
        return Path(self.CONTENT_DIR)

    @property
    def velog_path(self) -> Path:
        return self.content_path / self.VELOG_SUBDIR


# Global settings instance (evaluated at import, but reads env on construction)
settings = Settings()
