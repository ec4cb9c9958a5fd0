"""動画メタデータ取得インターフェース"""

from dataclasses import dataclass, field
from typing import Protocol

from ytcaptions.domain.video_id import VideoId


@dataclass(frozen=True)
class SubtitleFormat:
    """字幕データの1フォーマット（json3, vtt など）"""

    ext: str
    url: str
    name: str | None = None  # 言語の表示名（取得元が返す場合のみ）


@dataclass
class VideoMetadata:
    """動画メタデータのうち字幕に関係する部分"""

    video_id: str
    title: str
    # 言語コード → 利用可能なフォーマット一覧
    subtitles: dict[str, list[SubtitleFormat]] = field(default_factory=dict)
    automatic_captions: dict[str, list[SubtitleFormat]] = field(default_factory=dict)


class VideoMetadataFetcher(Protocol):
    """動画メタデータ取得のインターフェース"""

    def fetch(self, video_id: VideoId) -> VideoMetadata:
        """
        動画のメタデータを取得

        Args:
            video_id: 検証済みの動画ID

        Returns:
            VideoMetadata

        Raises:
            VideoUnavailableError: 動画が存在しない・非公開
            UpstreamUnavailableError: ネットワークエラー等
        """
        ...
