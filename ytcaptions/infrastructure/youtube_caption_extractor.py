"""yt-dlp メタデータ・YouTube字幕データからの情報抽出"""

import html
import json
import re

from ytcaptions.application.interfaces.caption_payload_extractor import (
    RawCaption,
    RawTrackEntry,
)
from ytcaptions.application.interfaces.caption_transport import CaptionPayload
from ytcaptions.application.interfaces.video_metadata_fetcher import (
    SubtitleFormat,
    VideoMetadata,
)
from ytcaptions.domain.exceptions import MalformedPayloadError
from ytcaptions.infrastructure.logging_config import get_logger

logger = get_logger(__name__)

# json3 形式を優先（タイムスタンプがミリ秒で正確）
PREFERRED_FORMATS = ["json3", "srv3", "srv2", "srv1", "vtt", "ttml"]

# 字幕ではないトラック
_IGNORED_LANGUAGES = {"live_chat"}

_P_ELEMENT = re.compile(r"<p\b([^>]*?)(?<!/)>(.*?)</p>", re.DOTALL)
_TEXT_ELEMENT = re.compile(r"<text\b([^>]*?)(?<!/)>(.*?)</text>", re.DOTALL)
_ATTRIBUTE = re.compile(r'([\w:]+)="([^"]*)"')
_LINE_BREAK = re.compile(r"<br\s*/?>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]+>")
_VTT_TIMING = re.compile(
    r"^((?:\d+:)?\d{2}:\d{2}[.,]\d{3})\s*-->\s*((?:\d+:)?\d{2}:\d{2}[.,]\d{3})"
)


class YouTubeCaptionExtractor:
    """
    yt-dlp のメタデータから字幕トラック一覧を、字幕データからキューを取り出す

    対応形式: json3 / srv3 / srv2 / srv1 / ttml / vtt
    """

    def __init__(self, preferred_formats: list[str] | None = None) -> None:
        self.preferred_formats = preferred_formats or PREFERRED_FORMATS

    def extract_track_entries(self, metadata: VideoMetadata) -> list[RawTrackEntry]:
        """
        字幕トラック一覧を取り出す（手動字幕 → 自動生成字幕の順）

        言語ごとに優先順位の最も高いフォーマットのURLを採用する。
        """
        entries: list[RawTrackEntry] = []
        for subs, is_auto in (
            (metadata.subtitles, False),
            (metadata.automatic_captions, True),
        ):
            for lang, formats in subs.items():
                if lang in _IGNORED_LANGUAGES:
                    continue

                selected = self._select_format(formats)
                if selected is None:
                    logger.debug(f"  {lang}: 対応フォーマットなし")
                    continue

                entries.append(
                    RawTrackEntry(
                        url=selected.url,
                        language_code=lang,
                        language_name=self._language_name(formats, lang),
                        is_auto_generated=is_auto,
                    )
                )

        logger.debug(f"[字幕] {metadata.video_id}: {len(entries)}トラック抽出")
        return entries

    def _select_format(self, formats: list[SubtitleFormat]) -> SubtitleFormat | None:
        for fmt in self.preferred_formats:
            for sub_format in formats:
                if sub_format.ext == fmt:
                    return sub_format
        return None

    def _language_name(self, formats: list[SubtitleFormat], lang: str) -> str:
        for sub_format in formats:
            if sub_format.name:
                return sub_format.name
        return lang

    def extract_captions(self, payload: CaptionPayload) -> list[RawCaption]:
        """
        字幕データをパース（形式は内容から判別）

        テキストは改行を含めてそのまま返し、空白のみのキューも除外しない。

        Raises:
            MalformedPayloadError: 未対応の形式、またはパース失敗
        """
        content = payload.content.lstrip("\ufeff").lstrip()

        if content.startswith("{"):
            return self._parse_json3(content)
        if content.startswith("WEBVTT"):
            return self._parse_vtt(content)
        if content.startswith("<") and re.search(r"<(timedtext|transcript|tt)\b", content):
            return self._parse_xml(content)

        raise MalformedPayloadError(f"Unrecognized caption payload: {payload.url}")

    def _parse_json3(self, data: str) -> list[RawCaption]:
        """json3 形式をパース"""
        try:
            parsed = json.loads(data)
        except json.JSONDecodeError as e:
            raise MalformedPayloadError(f"Invalid json3 payload: {e}") from e

        events = parsed.get("events", []) if isinstance(parsed, dict) else None
        if not isinstance(events, list):
            raise MalformedPayloadError("json3 payload has no events list")

        captions = []
        try:
            for event in events:
                # tStartMs: 開始時間（ミリ秒）
                # dDurationMs: 継続時間（ミリ秒）
                # segs: セグメント（テキスト）
                segs = event.get("segs")
                if not segs:
                    continue

                captions.append(
                    self._raw_caption(
                        "".join(seg.get("utf8", "") for seg in segs),
                        int(event.get("tStartMs", 0)),
                        int(event.get("dDurationMs", 0)),
                    )
                )
        except (AttributeError, TypeError, ValueError) as e:
            raise MalformedPayloadError(f"Invalid json3 event: {e}") from e

        return captions

    def _parse_xml(self, data: str) -> list[RawCaption]:
        """
        srv1/srv2/srv3/ttml 形式（XML）をパース

        <text start="0.0" dur="1.5">  (srv1, 秒)
        <p t="0" d="1500">            (srv3, ミリ秒)
        <p begin="00:00:00.000" end="00:00:01.500">  (ttml)
        """
        captions = []
        try:
            for attrs_str, body in _TEXT_ELEMENT.findall(data):
                attrs = dict(_ATTRIBUTE.findall(attrs_str))
                captions.append(
                    self._raw_caption(
                        self._clean_text(body),
                        self._seconds_to_ms(attrs["start"]),
                        self._seconds_to_ms(attrs.get("dur", "0")),
                    )
                )

            for attrs_str, body in _P_ELEMENT.findall(data):
                attrs = dict(_ATTRIBUTE.findall(attrs_str))
                if "t" in attrs:
                    offset_ms = int(attrs["t"])
                    duration_ms = int(attrs.get("d", "0"))
                else:
                    offset_ms = self._parse_timestamp_ms(attrs["begin"])
                    duration_ms = max(0, self._parse_timestamp_ms(attrs["end"]) - offset_ms)
                captions.append(
                    self._raw_caption(self._clean_text(body), offset_ms, duration_ms)
                )
        except (KeyError, ValueError) as e:
            raise MalformedPayloadError(f"Invalid XML caption element: {e}") from e

        return captions

    def _parse_vtt(self, data: str) -> list[RawCaption]:
        """VTT 形式をパース"""
        captions = []
        lines = data.splitlines()
        i = 0
        while i < len(lines):
            match = _VTT_TIMING.match(lines[i].strip())
            if not match:
                i += 1
                continue

            start = self._parse_timestamp_ms(match.group(1))
            end = self._parse_timestamp_ms(match.group(2))
            i += 1
            text_lines = []
            while i < len(lines) and lines[i].strip():
                text_lines.append(lines[i])
                i += 1
            captions.append(
                RawCaption(
                    text=self._clean_text("\n".join(text_lines)),
                    offset_ms=start,
                    duration_ms=max(0, end - start),
                )
            )

        return captions

    def _raw_caption(self, text: str, offset_ms: int, duration_ms: int) -> RawCaption:
        if offset_ms < 0 or duration_ms < 0:
            raise MalformedPayloadError(
                f"Negative caption timing: offset={offset_ms}ms, duration={duration_ms}ms"
            )
        return RawCaption(text=text, offset_ms=offset_ms, duration_ms=duration_ms)

    def _clean_text(self, text: str) -> str:
        """タグを除去してHTMLエンティティを戻す"""
        text = _LINE_BREAK.sub("\n", text)
        return html.unescape(_TAG.sub("", text))

    def _seconds_to_ms(self, value: str) -> int:
        return round(float(value) * 1000)

    def _parse_timestamp_ms(self, ts: str) -> int:
        """タイムスタンプをミリ秒に変換（00:00:00.000 / 00:00.000 / 1.5s 形式）"""
        ts = ts.strip().replace(",", ".").removesuffix("s")
        parts = ts.split(":")
        if len(parts) == 3:
            h, m, s = parts
            return int(h) * 3_600_000 + int(m) * 60_000 + self._seconds_to_ms(s)
        elif len(parts) == 2:
            m, s = parts
            return int(m) * 60_000 + self._seconds_to_ms(s)
        else:
            return self._seconds_to_ms(ts)
