"""取得データから字幕情報を取り出すインターフェース"""

from dataclasses import dataclass
from typing import Protocol

from ytcaptions.application.interfaces.caption_transport import CaptionPayload
from ytcaptions.application.interfaces.video_metadata_fetcher import VideoMetadata


@dataclass(frozen=True)
class RawTrackEntry:
    """メタデータから取り出した字幕トラック1件"""

    url: str
    language_code: str
    language_name: str
    is_auto_generated: bool


@dataclass(frozen=True)
class RawCaption:
    """字幕データから取り出したキュー1件（空白のみのテキストも含む）"""

    text: str
    offset_ms: int
    duration_ms: int


class CaptionPayloadExtractor(Protocol):
    """字幕情報抽出のインターフェース"""

    def extract_track_entries(self, metadata: VideoMetadata) -> list[RawTrackEntry]:
        """
        メタデータから字幕トラック一覧を取り出す

        Raises:
            MalformedPayloadError: 想定した構造がない
        """
        ...

    def extract_captions(self, payload: CaptionPayload) -> list[RawCaption]:
        """
        字幕データからキューを取り出す（順序は元データのまま）

        Raises:
            MalformedPayloadError: パースできない
        """
        ...
