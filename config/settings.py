"""設定管理"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """アプリケーション設定"""

    # Caption selection
    # 優先する言語コード（UIの初期選択に使用）
    PREFERRED_LANGUAGES: list[str] = ["ja", "en"]
    # 優先する字幕フォーマット（先頭ほど優先）
    PREFERRED_FORMATS: list[str] = ["json3", "srv3", "srv2", "srv1", "vtt", "ttml"]

    # Network
    HTTP_TIMEOUT_SEC: float = 30
    METADATA_TIMEOUT_SEC: float = 30
    USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    # Paths
    OUTPUT_DIR: str = "outputs"

    # Logging & Observability
    LOG_LEVEL: str = "INFO"
    LANGSMITH_TRACING: bool = False
    LANGSMITH_API_KEY: str | None = None
    LANGSMITH_PROJECT: str = "ytcaptions"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """シングルトンで設定を取得"""
    return Settings()
