"""リトライ戦略"""

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

# 字幕データ取得用デコレータ（通信エラーのみ再試行、HTTPステータスエラーは即失敗）
api_retry = retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((httpx.TransportError, TimeoutError)),
    reraise=True,
)
