"""YouTubeCaptionExtractorのテスト"""

import json

import pytest

from ytcaptions.application.interfaces.caption_payload_extractor import RawCaption
from ytcaptions.application.interfaces.caption_transport import CaptionPayload
from ytcaptions.application.interfaces.video_metadata_fetcher import (
    SubtitleFormat,
    VideoMetadata,
)
from ytcaptions.domain.exceptions import MalformedPayloadError
from ytcaptions.infrastructure.youtube_caption_extractor import YouTubeCaptionExtractor


def _payload(content: str) -> CaptionPayload:
    return CaptionPayload(url="https://example.com/timedtext", content=content)


class TestExtractTrackEntries:
    """字幕トラック一覧抽出のテスト"""

    def test_manual_before_auto_with_preferred_format(self) -> None:
        metadata = VideoMetadata(
            video_id="9bZkp7q19f0",
            title="test",
            subtitles={
                "en": [
                    SubtitleFormat("vtt", "https://x/en.vtt", "English"),
                    SubtitleFormat("json3", "https://x/en.json3", "English"),
                ],
                "live_chat": [SubtitleFormat("json", "https://x/chat")],
            },
            automatic_captions={
                "en": [SubtitleFormat("srv3", "https://x/en-auto.srv3", "English")],
                "ko": [SubtitleFormat("vtt", "https://x/ko.vtt")],
            },
        )

        entries = YouTubeCaptionExtractor().extract_track_entries(metadata)

        assert [(e.language_code, e.is_auto_generated, e.url) for e in entries] == [
            ("en", False, "https://x/en.json3"),
            ("en", True, "https://x/en-auto.srv3"),
            ("ko", True, "https://x/ko.vtt"),
        ]
        assert entries[0].language_name == "English"
        assert entries[2].language_name == "ko"

    def test_skips_unsupported_formats(self) -> None:
        metadata = VideoMetadata(
            video_id="9bZkp7q19f0",
            title="test",
            subtitles={"fr": [SubtitleFormat("srt", "https://x/fr.srt", "French")]},
        )
        assert YouTubeCaptionExtractor().extract_track_entries(metadata) == []

    def test_custom_format_preference(self) -> None:
        metadata = VideoMetadata(
            video_id="9bZkp7q19f0",
            title="test",
            subtitles={
                "en": [
                    SubtitleFormat("json3", "https://x/en.json3"),
                    SubtitleFormat("vtt", "https://x/en.vtt"),
                ]
            },
        )
        extractor = YouTubeCaptionExtractor(preferred_formats=["vtt", "json3"])
        assert extractor.extract_track_entries(metadata)[0].url == "https://x/en.vtt"


class TestExtractCaptions:
    """字幕データパースのテスト"""

    def test_json3(self) -> None:
        data = {
            "events": [
                {"tStartMs": 0, "dDurationMs": 5000},  # segsなし（ウィンドウ定義）
                {"tStartMs": 0, "dDurationMs": 1500, "segs": [{"utf8": "Hello"}, {"utf8": " there"}]},
                {"tStartMs": 1500, "dDurationMs": 10, "segs": [{"utf8": "\n"}]},
                {"tStartMs": 2000, "segs": [{"utf8": "World"}]},
            ]
        }

        captions = YouTubeCaptionExtractor().extract_captions(_payload(json.dumps(data)))

        assert captions == [
            RawCaption("Hello there", 0, 1500),
            RawCaption("\n", 1500, 10),
            RawCaption("World", 2000, 0),
        ]

    def test_json3_invalid(self) -> None:
        with pytest.raises(MalformedPayloadError):
            YouTubeCaptionExtractor().extract_captions(_payload("{not json"))

    def test_json3_without_events(self) -> None:
        with pytest.raises(MalformedPayloadError):
            YouTubeCaptionExtractor().extract_captions(_payload('{"events": 3}'))

    def test_srv3(self) -> None:
        data = (
            '<?xml version="1.0" encoding="utf-8" ?><timedtext format="3"><body>'
            '<p t="0" d="1500">Hello &amp; welcome</p>'
            '<p t="2000" d="1000" w="1"><s ac="0">Wor</s><s t="300">ld</s></p>'
            '<p t="3000"/>'
            "</body></timedtext>"
        )

        captions = YouTubeCaptionExtractor().extract_captions(_payload(data))

        assert captions == [
            RawCaption("Hello & welcome", 0, 1500),
            RawCaption("World", 2000, 1000),
        ]

    def test_srv1(self) -> None:
        data = (
            '<?xml version="1.0" encoding="utf-8" ?><transcript>'
            '<text start="0.5" dur="1.25">It&#39;s here</text>'
            '<text start="2">no duration</text>'
            "</transcript>"
        )

        captions = YouTubeCaptionExtractor().extract_captions(_payload(data))

        assert captions == [
            RawCaption("It's here", 500, 1250),
            RawCaption("no duration", 2000, 0),
        ]

    def test_ttml(self) -> None:
        data = (
            '<?xml version="1.0" encoding="utf-8" ?><tt xmlns="http://www.w3.org/ns/ttml"><body><div>'
            '<p begin="00:00:01.000" end="00:00:02.500" style="s2">first<br />second</p>'
            "</div></body></tt>"
        )

        captions = YouTubeCaptionExtractor().extract_captions(_payload(data))

        assert captions == [RawCaption("first\nsecond", 1000, 1500)]

    def test_xml_missing_attribute(self) -> None:
        data = "<timedtext><body><p>no timing</p></body></timedtext>"
        with pytest.raises(MalformedPayloadError):
            YouTubeCaptionExtractor().extract_captions(_payload(data))

    @pytest.mark.parametrize(
        "data",
        [
            '<timedtext><body><p t="1000" d="-500">negative</p></body></timedtext>',
            '<timedtext><body><p t="-1" d="500">negative</p></body></timedtext>',
            '<transcript><text start="-0.5" dur="1">negative</text></transcript>',
            '{"events": [{"tStartMs": 0, "dDurationMs": -10, "segs": [{"utf8": "x"}]}]}',
        ],
    )
    def test_negative_timing_is_malformed(self, data: str) -> None:
        """負の時刻・長さはパース失敗として扱う"""
        with pytest.raises(MalformedPayloadError, match="Negative"):
            YouTubeCaptionExtractor().extract_captions(_payload(data))

    def test_vtt(self) -> None:
        data = (
            "\ufeffWEBVTT\n"
            "Kind: captions\n"
            "Language: en\n"
            "\n"
            "00:00:00.000 --> 00:00:01.500 align:start position:0%\n"
            "<c>Hello</c>\n"
            "world\n"
            "\n"
            "01:02:03.500 --> 01:02:04.000\n"
            "Later\n"
        )

        captions = YouTubeCaptionExtractor().extract_captions(_payload(data))

        assert captions == [
            RawCaption("Hello\nworld", 0, 1500),
            RawCaption("Later", 3_723_500, 500),
        ]

    def test_unrecognized(self) -> None:
        with pytest.raises(MalformedPayloadError):
            YouTubeCaptionExtractor().extract_captions(_payload("<html>Sorry</html>"))
