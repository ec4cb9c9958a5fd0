"""SubRip (SRT) 形式のフォーマットユーティリティ"""

from datetime import timedelta

from ytcaptions.domain.entities import ClosedCaption

_MS_PER_HOUR = 3_600_000
_MS_PER_MINUTE = 60_000
_MS_PER_SECOND = 1_000


def to_milliseconds(span: timedelta) -> int:
    """timedeltaを整数ミリ秒に変換（ミリ秒未満は切り捨て）"""
    return span // timedelta(milliseconds=1)


def format_timestamp(span: timedelta) -> str:
    """
    SRTのタイムスタンプ形式（HH:MM:SS,mmm）に変換

    時間は24で折り返さず、経過時間の合計をそのまま表示する。

    Example:
        timedelta(milliseconds=3723500) → "01:02:03,500"
    """
    total_ms = to_milliseconds(span)
    hours, remainder = divmod(total_ms, _MS_PER_HOUR)
    minutes, remainder = divmod(remainder, _MS_PER_MINUTE)
    seconds, milliseconds = divmod(remainder, _MS_PER_SECOND)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{milliseconds:03d}"


def format_entry(number: int, caption: ClosedCaption) -> str:
    """
    SRTの1エントリ（番号・時間・本文・空行）を生成

    本文に含まれる改行はそのまま出力する。
    """
    start = format_timestamp(caption.offset)
    end = format_timestamp(caption.end)
    return f"{number}\n{start} --> {end}\n{caption.text}\n\n"
