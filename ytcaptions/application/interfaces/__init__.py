# Application Interfaces (Protocols)
from ytcaptions.application.interfaces.caption_payload_extractor import (
    CaptionPayloadExtractor,
    RawCaption,
    RawTrackEntry,
)
from ytcaptions.application.interfaces.caption_transport import (
    CaptionPayload,
    CaptionTransport,
)
from ytcaptions.application.interfaces.text_sink import ProgressCallback, TextSink
from ytcaptions.application.interfaces.video_metadata_fetcher import (
    SubtitleFormat,
    VideoMetadata,
    VideoMetadataFetcher,
)

__all__ = [
    "VideoMetadataFetcher",
    "VideoMetadata",
    "SubtitleFormat",
    "CaptionPayloadExtractor",
    "RawTrackEntry",
    "RawCaption",
    "CaptionTransport",
    "CaptionPayload",
    "TextSink",
    "ProgressCallback",
]
