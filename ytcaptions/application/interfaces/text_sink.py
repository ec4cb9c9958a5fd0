"""出力先と進捗通知のインターフェース"""

from typing import Any, Callable, Protocol

# 進捗コールバック (progress: 0.0 < p <= 1.0)
ProgressCallback = Callable[[float], None]


class TextSink(Protocol):
    """テキストの逐次書き込み先（ファイル、io.StringIO など）"""

    def write(self, text: str, /) -> Any:
        ...
