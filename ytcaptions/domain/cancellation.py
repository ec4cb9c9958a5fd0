"""協調的キャンセル"""

import threading

from ytcaptions.domain.exceptions import OperationCancelledError


class CancellationToken:
    """
    処理の各ステップ前にポーリングするキャンセルフラグ

    別スレッド（UIなど）から cancel() を呼んでもよい。

    Example:
        token = CancellationToken()
        client.download(track_info, "out.srt", cancellation=token)
        # 別スレッドから
        token.cancel()
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """キャンセル済みならOperationCancelledErrorを送出"""
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")
