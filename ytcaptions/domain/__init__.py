# Domain Layer
from ytcaptions.domain.cancellation import CancellationToken
from ytcaptions.domain.entities import (
    ClosedCaption,
    ClosedCaptionManifest,
    ClosedCaptionTrack,
    ClosedCaptionTrackInfo,
    Language,
)
from ytcaptions.domain.exceptions import (
    CaptionNotFoundError,
    CaptionsError,
    InvalidVideoIdError,
    MalformedPayloadError,
    OperationCancelledError,
    TrackNotFoundError,
    UpstreamUnavailableError,
    VideoUnavailableError,
)
from ytcaptions.domain.video_id import VideoId

__all__ = [
    "Language",
    "ClosedCaption",
    "ClosedCaptionTrack",
    "ClosedCaptionTrackInfo",
    "ClosedCaptionManifest",
    "VideoId",
    "CancellationToken",
    "CaptionsError",
    "InvalidVideoIdError",
    "UpstreamUnavailableError",
    "VideoUnavailableError",
    "MalformedPayloadError",
    "TrackNotFoundError",
    "CaptionNotFoundError",
    "OperationCancelledError",
]
