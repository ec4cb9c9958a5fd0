# Infrastructure Layer
from ytcaptions.infrastructure.http_transport import HttpxCaptionTransport
from ytcaptions.infrastructure.youtube_caption_extractor import YouTubeCaptionExtractor
from ytcaptions.infrastructure.ytdlp_metadata import YtdlpMetadataFetcher

__all__ = [
    "YtdlpMetadataFetcher",
    "YouTubeCaptionExtractor",
    "HttpxCaptionTransport",
]
