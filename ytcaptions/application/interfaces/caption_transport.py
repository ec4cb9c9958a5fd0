"""字幕データ取得（通信）インターフェース"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class CaptionPayload:
    """字幕URLから取得した生データ"""

    url: str
    content: str


class CaptionTransport(Protocol):
    """字幕データ取得のインターフェース"""

    def fetch_payload(self, url: str) -> CaptionPayload:
        """
        字幕URLから生データを取得

        Args:
            url: ClosedCaptionTrackInfo.url

        Returns:
            CaptionPayload

        Raises:
            UpstreamUnavailableError: ネットワークエラー、HTTPエラー
        """
        ...
