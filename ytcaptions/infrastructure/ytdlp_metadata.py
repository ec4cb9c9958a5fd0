"""yt-dlp ベースの動画メタデータ取得"""

from typing import Any

import yt_dlp

from ytcaptions.application.interfaces.video_metadata_fetcher import (
    SubtitleFormat,
    VideoMetadata,
)
from ytcaptions.domain.exceptions import (
    MalformedPayloadError,
    UpstreamUnavailableError,
    VideoUnavailableError,
)
from ytcaptions.domain.video_id import VideoId
from ytcaptions.infrastructure.logging_config import get_logger, trace_tool

logger = get_logger(__name__)

# 動画自体が取得できないことを示す yt-dlp のエラーメッセージ
_UNAVAILABLE_MARKERS = (
    "Private video",
    "Video unavailable",
    "This video has been removed",
    "members-only",
)


class YtdlpMetadataFetcher:
    """
    yt-dlp を使用した動画メタデータ取得

    動画本体はダウンロードせず、字幕一覧（手動・自動生成）のみ取り出す。
    """

    def __init__(self, socket_timeout_sec: float = 30) -> None:
        # yt-dlp のオプション（メタデータ取得のみ）
        self.ydl_opts = {
            "quiet": True,
            "no_warnings": True,
            "skip_download": True,
            "writesubtitles": False,  # ファイル書き出しはしない
            "writeautomaticsub": False,
            "socket_timeout": socket_timeout_sec,
        }

    @trace_tool(name="fetch_video_metadata")
    def fetch(self, video_id: VideoId) -> VideoMetadata:
        """
        動画のメタデータを取得

        Raises:
            VideoUnavailableError: 非公開・削除済み等
            UpstreamUnavailableError: その他のダウンロードエラー
            MalformedPayloadError: 字幕情報の形式が想定外
        """
        logger.debug(f"[メタデータ] 取得開始: {video_id}")

        try:
            with yt_dlp.YoutubeDL(self.ydl_opts) as ydl:
                info = ydl.extract_info(video_id.url, download=False)
        except yt_dlp.utils.DownloadError as e:
            error_msg = str(e)
            if any(marker in error_msg for marker in _UNAVAILABLE_MARKERS):
                logger.debug(f"[メタデータ] 動画が利用不可: {video_id}")
                raise VideoUnavailableError(
                    f"Video {video_id} is unavailable: {error_msg}"
                ) from e
            logger.error(f"[メタデータ] ダウンロードエラー: {video_id} - {e}")
            raise UpstreamUnavailableError(
                f"Failed to fetch metadata for {video_id}: {error_msg}"
            ) from e

        if not info:
            raise VideoUnavailableError(f"No metadata returned for video {video_id}")

        metadata = VideoMetadata(
            video_id=str(info.get("id") or video_id),
            title=info.get("title") or "",
            subtitles=self._parse_subtitle_map(info.get("subtitles")),
            automatic_captions=self._parse_subtitle_map(info.get("automatic_captions")),
        )
        logger.debug(
            f"  利用可能な字幕: 手動={list(metadata.subtitles)}, "
            f"自動={list(metadata.automatic_captions)}"
        )
        return metadata

    def _parse_subtitle_map(self, raw: Any) -> dict[str, list[SubtitleFormat]]:
        """
        yt-dlp の字幕辞書を型付きに変換

        raw は {"ja": [{"ext": "json3", "url": "...", "name": "Japanese"}, ...]} の形式
        """
        if not raw:
            return {}
        if not isinstance(raw, dict):
            raise MalformedPayloadError(f"Unexpected subtitle map: {type(raw).__name__}")

        result: dict[str, list[SubtitleFormat]] = {}
        for lang, formats in raw.items():
            if not isinstance(formats, list):
                raise MalformedPayloadError(f"Unexpected formats for {lang!r}")
            result[lang] = [
                SubtitleFormat(ext=fmt["ext"], url=fmt["url"], name=fmt.get("name"))
                for fmt in formats
                if isinstance(fmt, dict) and fmt.get("ext") and fmt.get("url")
            ]
        return result
