"""ドメイン固有の例外定義"""


class CaptionsError(Exception):
    """基底例外クラス"""

    pass


class InvalidVideoIdError(CaptionsError):
    """動画IDまたはURLが不正"""

    pass


class UpstreamUnavailableError(CaptionsError):
    """メタデータ取得・字幕取得先に到達できない"""

    pass


class VideoUnavailableError(UpstreamUnavailableError):
    """動画が存在しない、非公開、または利用不可"""

    pass


class MalformedPayloadError(CaptionsError):
    """取得したデータに想定した構造がない"""

    pass


class TrackNotFoundError(CaptionsError):
    """条件に一致する字幕トラックがない"""

    pass


class CaptionNotFoundError(CaptionsError):
    """指定時刻に表示される字幕がない"""

    pass


class OperationCancelledError(CaptionsError):
    """キャンセル要求により処理を中断した"""

    pass
