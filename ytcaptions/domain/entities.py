"""ドメインエンティティ定義"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import timedelta

from ytcaptions.domain.exceptions import CaptionNotFoundError, TrackNotFoundError


@dataclass(frozen=True)
class Language:
    """言語を表す値オブジェクト（同値判定は言語コードのみ）"""

    code: str
    name: str = field(compare=False)

    def __str__(self) -> str:
        return f"{self.code} ({self.name})"


@dataclass(frozen=True)
class ClosedCaption:
    """字幕の1キュー"""

    text: str
    offset: timedelta
    duration: timedelta

    def __post_init__(self) -> None:
        if self.offset < timedelta(0):
            raise ValueError("offset must be non-negative")
        if self.duration < timedelta(0):
            raise ValueError("duration must be non-negative")

    @property
    def end(self) -> timedelta:
        """表示終了時刻"""
        return self.offset + self.duration

    def is_displayed_at(self, time: timedelta) -> bool:
        return self.offset <= time <= self.end


@dataclass(frozen=True)
class ClosedCaptionTrack:
    """
    字幕トラック本体

    キューは受け取った順序（再生順）のまま保持し、並べ替えは行わない。
    """

    captions: tuple[ClosedCaption, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "captions", tuple(self.captions))
        for i, caption in enumerate(self.captions):
            if not caption.text or caption.text.isspace():
                raise ValueError(f"caption {i} has blank text")

    def __len__(self) -> int:
        return len(self.captions)

    def __iter__(self) -> Iterator[ClosedCaption]:
        return iter(self.captions)

    def try_get_by_time(self, time: timedelta) -> ClosedCaption | None:
        """
        指定時刻に表示されている字幕を取得

        Args:
            time: 動画先頭からの経過時間

        Returns:
            最初に一致したClosedCaption、なければNone
        """
        for caption in self.captions:
            if caption.is_displayed_at(time):
                return caption
        return None

    def get_by_time(self, time: timedelta) -> ClosedCaption:
        """指定時刻に表示されている字幕を取得（なければ例外）"""
        caption = self.try_get_by_time(time)
        if caption is None:
            raise CaptionNotFoundError(f"No closed caption displayed at {time}")
        return caption


@dataclass(frozen=True)
class ClosedCaptionTrackInfo:
    """字幕トラックのメタデータ（本体取得用のハンドル）"""

    url: str
    language: Language
    is_auto_generated: bool

    def __str__(self) -> str:
        kind = "auto-generated" if self.is_auto_generated else "manual"
        return f"CC Track ({self.language}, {kind})"


@dataclass(frozen=True)
class ClosedCaptionManifest:
    """動画で利用可能な字幕トラックの一覧"""

    tracks: tuple[ClosedCaptionTrackInfo, ...]

    def __len__(self) -> int:
        return len(self.tracks)

    def __iter__(self) -> Iterator[ClosedCaptionTrackInfo]:
        return iter(self.tracks)

    @property
    def languages(self) -> list[Language]:
        """出現順で重複を除いた言語一覧"""
        seen: list[Language] = []
        for track in self.tracks:
            if track.language not in seen:
                seen.append(track.language)
        return seen

    def find_by_language(self, language_code: str) -> list[ClosedCaptionTrackInfo]:
        """言語コードが完全一致するトラックを全て取得"""
        return [t for t in self.tracks if t.language.code == language_code]

    def filter_auto_generated(self, is_auto_generated: bool) -> list[ClosedCaptionTrackInfo]:
        """自動生成かどうかでトラックを絞り込み"""
        return [t for t in self.tracks if t.is_auto_generated == is_auto_generated]

    def try_get_by_language(
        self,
        language_code: str,
        is_auto_generated: bool | None = None,
    ) -> ClosedCaptionTrackInfo | None:
        """
        言語コードでトラックを1件取得

        Args:
            language_code: 言語コード（完全一致）
            is_auto_generated: 指定時は自動生成フラグも一致するものに限定

        Returns:
            最初に一致したトラック、なければNone
        """
        for track in self.find_by_language(language_code):
            if is_auto_generated is None or track.is_auto_generated == is_auto_generated:
                return track
        return None

    def get_by_language(
        self,
        language_code: str,
        is_auto_generated: bool | None = None,
    ) -> ClosedCaptionTrackInfo:
        """言語コードでトラックを1件取得（なければ例外）"""
        track = self.try_get_by_language(language_code, is_auto_generated)
        if track is None:
            raise TrackNotFoundError(
                f"No closed caption track available for language {language_code!r}"
            )
        return track
