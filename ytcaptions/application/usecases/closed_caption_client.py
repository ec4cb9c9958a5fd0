"""メインユースケース: 字幕トラックの一覧取得・本体取得・SRT出力"""

import logging
import os
from datetime import timedelta

from ytcaptions.application.interfaces.caption_payload_extractor import (
    CaptionPayloadExtractor,
)
from ytcaptions.application.interfaces.caption_transport import CaptionTransport
from ytcaptions.application.interfaces.text_sink import ProgressCallback, TextSink
from ytcaptions.application.interfaces.video_metadata_fetcher import (
    VideoMetadataFetcher,
)
from ytcaptions.domain.cancellation import CancellationToken
from ytcaptions.domain.entities import (
    ClosedCaption,
    ClosedCaptionManifest,
    ClosedCaptionTrack,
    ClosedCaptionTrackInfo,
    Language,
)
from ytcaptions.domain.srt_format import format_entry
from ytcaptions.domain.video_id import VideoId

logger = logging.getLogger(__name__)


class ClosedCaptionClient:
    """
    字幕関連の操作をまとめたクライアント

    取得・解析は外部コラボレータに委譲し、ここではドメインオブジェクトの
    組み立てとSRT出力のみを行う。コラボレータの例外はそのまま呼び出し元へ伝播する。
    """

    def __init__(
        self,
        metadata_fetcher: VideoMetadataFetcher,
        payload_extractor: CaptionPayloadExtractor,
        transport: CaptionTransport,
    ):
        self.metadata_fetcher = metadata_fetcher
        self.payload_extractor = payload_extractor
        self.transport = transport

    def get_manifest(self, video_id: str | VideoId) -> ClosedCaptionManifest:
        """
        動画で利用可能な字幕トラック一覧を取得

        Args:
            video_id: 動画IDまたは動画URL

        Returns:
            ClosedCaptionManifest（取得元の順序のまま、重複排除なし）

        Raises:
            InvalidVideoIdError: 動画IDが不正
            UpstreamUnavailableError: 取得失敗
            MalformedPayloadError: メタデータの構造が想定外
        """
        video_id = VideoId.parse(video_id)
        logger.info(f"[字幕] トラック一覧取得: {video_id}")

        metadata = self.metadata_fetcher.fetch(video_id)
        entries = self.payload_extractor.extract_track_entries(metadata)

        tracks = tuple(
            ClosedCaptionTrackInfo(
                url=entry.url,
                language=Language(code=entry.language_code, name=entry.language_name),
                is_auto_generated=entry.is_auto_generated,
            )
            for entry in entries
        )
        logger.info(f"  {len(tracks)}件のトラック")
        return ClosedCaptionManifest(tracks=tracks)

    def get_track(self, track_info: ClosedCaptionTrackInfo) -> ClosedCaptionTrack:
        """
        字幕トラック本体を取得

        テキストが空または空白のみのキューは除外する。

        Args:
            track_info: 同じ動画のマニフェストから得たトラック情報

        Returns:
            ClosedCaptionTrack
        """
        logger.info(f"[字幕] トラック取得: {track_info}")

        payload = self.transport.fetch_payload(track_info.url)
        raw_captions = self.payload_extractor.extract_captions(payload)

        captions = tuple(
            ClosedCaption(
                text=raw.text,
                offset=timedelta(milliseconds=raw.offset_ms),
                duration=timedelta(milliseconds=raw.duration_ms),
            )
            for raw in raw_captions
            if raw.text and not raw.text.isspace()
        )
        skipped = len(raw_captions) - len(captions)
        logger.debug(f"  {len(captions)}キュー (空白のみ {skipped}件を除外)")
        return ClosedCaptionTrack(captions=captions)

    def write_track(
        self,
        track: ClosedCaptionTrack,
        sink: TextSink,
        progress_callback: ProgressCallback | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """
        字幕トラックをSRT形式で書き出す

        キューごとに書き込み前にキャンセルを確認する。キャンセル時は
        それまでに書き込んだ内容はそのまま残る。

        Args:
            track: 書き出す字幕トラック
            sink: 書き込み先（write(str) を持つもの）
            progress_callback: 進捗コールバック (progress: float)
            cancellation: キャンセルトークン

        Raises:
            OperationCancelledError: キャンセルされた
        """
        total = len(track.captions)
        for i, caption in enumerate(track.captions):
            if cancellation is not None:
                cancellation.raise_if_cancelled()

            sink.write(format_entry(i + 1, caption))

            if progress_callback:
                progress_callback((i + 1) / total)

        logger.debug(f"[字幕] SRT書き出し完了: {total}エントリ")

    def write_to(
        self,
        track_info: ClosedCaptionTrackInfo,
        sink: TextSink,
        progress_callback: ProgressCallback | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """字幕トラックを取得してSRT形式で書き出す"""
        track = self.get_track(track_info)
        self.write_track(track, sink, progress_callback, cancellation)

    def download(
        self,
        track_info: ClosedCaptionTrackInfo,
        file_path: str | os.PathLike[str],
        progress_callback: ProgressCallback | None = None,
        cancellation: CancellationToken | None = None,
    ) -> None:
        """
        字幕トラックをSRTファイルとして保存

        失敗・キャンセル時もファイルは必ず閉じる（途中までの内容は残る）。
        """
        logger.info(f"[字幕] ダウンロード: {track_info} -> {file_path}")
        with open(file_path, "w", encoding="utf-8") as f:
            self.write_to(track_info, f, progress_callback, cancellation)
