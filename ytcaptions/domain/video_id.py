"""YouTube動画IDの値オブジェクト"""

import re
from dataclasses import dataclass

from ytcaptions.domain.exceptions import InvalidVideoIdError

_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]{11}")

# 動画URLから ID 部分を取り出すパターン
_URL_PATTERNS = [
    re.compile(r"youtube\..+?/watch.*?[?&]v=([^&/#]*)"),
    re.compile(r"youtu\.be/([^?&/#]*)"),
    re.compile(r"youtube\..+?/embed/([^?&/#]*)"),
    re.compile(r"youtube\..+?/shorts/([^?&/#]*)"),
    re.compile(r"youtube\..+?/live/([^?&/#]*)"),
]


@dataclass(frozen=True)
class VideoId:
    """検証済みの動画ID（11文字）"""

    value: str

    def __post_init__(self) -> None:
        if not self.is_valid(self.value):
            raise InvalidVideoIdError(f"Invalid YouTube video ID: {self.value!r}")

    def __str__(self) -> str:
        return self.value

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.value}"

    @staticmethod
    def is_valid(value: str) -> bool:
        return bool(_ID_PATTERN.fullmatch(value))

    @classmethod
    def parse(cls, id_or_url: "str | VideoId") -> "VideoId":
        """
        動画IDまたは動画URLからVideoIdを生成

        Args:
            id_or_url: "dQw4w9WgXcQ" や "https://youtu.be/dQw4w9WgXcQ" など

        Returns:
            VideoId

        Raises:
            InvalidVideoIdError: IDとして解釈できない場合
        """
        if isinstance(id_or_url, VideoId):
            return id_or_url

        text = id_or_url.strip()
        if cls.is_valid(text):
            return cls(text)

        for pattern in _URL_PATTERNS:
            match = pattern.search(text)
            if match and cls.is_valid(match.group(1)):
                return cls(match.group(1))

        raise InvalidVideoIdError(f"Invalid YouTube video ID or URL: {id_or_url!r}")
