"""ロギング設定とLangSmithトレーシング統合"""

import logging
import os
import sys
import uuid
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, TypeVar

from langsmith import traceable

# 型変数
F = TypeVar("F", bound=Callable[..., Any])

# ロガーのキャッシュ
_loggers: dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    名前付きロガーを取得

    Args:
        name: ロガー名（通常は __name__ を使用）

    Returns:
        設定済みのロガー
    """
    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)
    _loggers[name] = logger
    return logger


def setup_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
) -> None:
    """
    アプリケーション全体のロギングを設定

    Args:
        level: ログレベル
        format_string: ログフォーマット文字列
    """
    if format_string is None:
        format_string = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

    logging.basicConfig(
        level=level,
        format=format_string,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    # 外部ライブラリのログレベルを調整
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("yt_dlp").setLevel(logging.WARNING)


def is_langsmith_enabled() -> bool:
    """LangSmithが有効かどうかを確認"""
    # Settingsから値を取得（.envファイルを読み込む）
    try:
        from config.settings import get_settings

        settings = get_settings()
        return settings.LANGSMITH_TRACING and bool(settings.LANGSMITH_API_KEY)
    except Exception:
        # Settingsが使えない場合は環境変数から直接取得
        tracing_enabled = os.getenv("LANGSMITH_TRACING", "").lower() in ("true", "1", "yes")
        api_key_set = bool(os.getenv("LANGSMITH_API_KEY"))
        return tracing_enabled and api_key_set


def generate_trace_metadata() -> dict[str, Any]:
    """トレース用のメタデータ（短縮セッションIDとタイムスタンプ）を生成"""
    return {
        "session_id": str(uuid.uuid4())[:8],
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _trace(
    name: str | None,
    run_type: str,
    metadata: dict[str, Any] | None,
) -> Callable[[F], F]:
    """
    LangSmithでトレースするデコレータ

    LangSmithが無効の場合はパススルー。
    各呼び出しで新しいrun_idを生成し、トレースが上書きされないようにする。
    """
    def decorator(func: F) -> F:
        if not is_langsmith_enabled():
            return func

        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            combined_metadata = {
                **(metadata or {}),
                **generate_trace_metadata(),
            }
            traced_func = traceable(
                name=name or func.__name__,
                run_type=run_type,
                metadata=combined_metadata,
                run_id=uuid.uuid4(),
            )(func)
            return traced_func(*args, **kwargs)

        return wrapper  # type: ignore

    return decorator


def trace_tool(
    name: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> Callable[[F], F]:
    """
    外部取得処理をトレースするデコレータ

    Example:
        @trace_tool(name="fetch_caption_payload")
        def fetch_payload(self, url: str) -> CaptionPayload:
            ...
    """
    return _trace(name=name, run_type="tool", metadata=metadata)
