"""httpx ベースの字幕データ取得"""

import httpx

from ytcaptions.application.interfaces.caption_transport import CaptionPayload
from ytcaptions.domain.exceptions import UpstreamUnavailableError, VideoUnavailableError
from ytcaptions.infrastructure.logging_config import get_logger, trace_tool
from ytcaptions.infrastructure.retry import api_retry

logger = get_logger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)


class HttpxCaptionTransport:
    """httpx による字幕URLの取得（通信エラーはtenacityで再試行）"""

    def __init__(
        self,
        timeout_sec: float = 30,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.Client | None = None,
    ):
        """
        Args:
            timeout_sec: リクエストのタイムアウト（秒）
            user_agent: User-Agent ヘッダ
            client: 差し替え用のhttpxクライアント（テスト用）
        """
        self.client = client or httpx.Client(
            timeout=timeout_sec,
            headers={"User-Agent": user_agent},
            follow_redirects=True,
        )

    @trace_tool(name="fetch_caption_payload")
    def fetch_payload(self, url: str) -> CaptionPayload:
        """
        字幕URLから生データを取得

        Raises:
            VideoUnavailableError: 404/410（URLの期限切れ等）
            UpstreamUnavailableError: その他のHTTPエラー、再試行後も通信失敗
        """
        logger.debug(f"  字幕データ取得: {url}")
        try:
            content = self._get(url)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"[字幕] HTTPエラー {status}: {url}")
            if status in (404, 410):
                raise VideoUnavailableError(
                    f"Caption track not found ({status}): {url}"
                ) from e
            raise UpstreamUnavailableError(
                f"Caption request failed ({status}): {url}"
            ) from e
        except (httpx.HTTPError, TimeoutError) as e:
            logger.error(f"[字幕] 通信エラー: {url} - {e}")
            raise UpstreamUnavailableError(f"Failed to fetch captions: {e}") from e

        logger.debug(f"  取得完了: {len(content)}文字")
        return CaptionPayload(url=url, content=content)

    @api_retry
    def _get(self, url: str) -> str:
        response = self.client.get(url)
        response.raise_for_status()
        return response.text

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "HttpxCaptionTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
