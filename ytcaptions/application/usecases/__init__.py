# Use Cases
from ytcaptions.application.usecases.closed_caption_client import ClosedCaptionClient

__all__ = [
    "ClosedCaptionClient",
]
