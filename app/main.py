"""Streamlit アプリケーションエントリーポイント"""

import logging
import os
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# .envファイルを最初に読み込む（LangSmith等の環境変数を設定するため）
from dotenv import load_dotenv
load_dotenv(project_root / ".env")

import streamlit as st

from config.settings import get_settings
from ytcaptions.application.usecases.closed_caption_client import ClosedCaptionClient
from ytcaptions.domain.entities import ClosedCaptionManifest, ClosedCaptionTrackInfo
from ytcaptions.domain.exceptions import CaptionsError
from ytcaptions.domain.video_id import VideoId
from ytcaptions.infrastructure.http_transport import HttpxCaptionTransport
from ytcaptions.infrastructure.logging_config import get_logger, is_langsmith_enabled, setup_logging
from ytcaptions.infrastructure.youtube_caption_extractor import YouTubeCaptionExtractor
from ytcaptions.infrastructure.ytdlp_metadata import YtdlpMetadataFetcher

# ロギング初期化
log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
log_level = getattr(logging, log_level_str, logging.INFO)
setup_logging(level=log_level)

logger = get_logger(__name__)


@st.cache_resource
def init_client() -> ClosedCaptionClient:
    """DIでクライアントを組み立て（再実行間で1つを共有）"""
    settings = get_settings()

    return ClosedCaptionClient(
        metadata_fetcher=YtdlpMetadataFetcher(
            socket_timeout_sec=settings.METADATA_TIMEOUT_SEC,
        ),
        payload_extractor=YouTubeCaptionExtractor(
            preferred_formats=settings.PREFERRED_FORMATS,
        ),
        transport=HttpxCaptionTransport(
            timeout_sec=settings.HTTP_TIMEOUT_SEC,
            user_agent=settings.USER_AGENT,
        ),
    )


def default_track_index(
    tracks: list[ClosedCaptionTrackInfo],
    preferred_languages: list[str],
) -> int:
    """優先言語（手動字幕優先）に一致するトラックの位置"""
    for lang in preferred_languages:
        for is_auto in (False, True):
            for i, track in enumerate(tracks):
                if track.language.code == lang and track.is_auto_generated == is_auto:
                    return i
    return 0


def output_path_for(video_id: VideoId, track: ClosedCaptionTrackInfo) -> Path:
    """保存先のSRTファイルパス"""
    settings = get_settings()
    suffix = "auto" if track.is_auto_generated else "manual"
    output_dir = Path(settings.OUTPUT_DIR)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / f"{video_id}_{track.language.code}_{suffix}.srt"


def load_manifest(video_input: str) -> None:
    """トラック一覧を取得してセッションに保存"""
    logger.info(f"[APP] トラック一覧リクエスト: {video_input!r}")
    try:
        video_id = VideoId.parse(video_input)
        with st.spinner("字幕トラックを取得中..."):
            manifest = init_client().get_manifest(video_id)
        st.session_state.video_id = video_id
        st.session_state.manifest = manifest
    except CaptionsError as e:
        logger.error(f"[APP] トラック一覧取得失敗: {e}")
        st.session_state.manifest = None
        st.error(f"字幕トラックを取得できませんでした: {e}")


def render_track_download(
    video_id: VideoId,
    manifest: ClosedCaptionManifest,
    include_auto: bool,
) -> None:
    """トラック選択とSRTダウンロード"""
    tracks = list(manifest) if include_auto else manifest.filter_auto_generated(False)
    if not tracks:
        st.warning("利用可能な字幕トラックがありません。")
        return

    st.success(f"📝 {len(tracks)}件の字幕トラック")
    selected = st.selectbox(
        "字幕トラック",
        options=tracks,
        index=default_track_index(tracks, get_settings().PREFERRED_LANGUAGES),
        format_func=lambda t: (
            f"{t.language.name} ({t.language.code})"
            f"{' - 自動生成' if t.is_auto_generated else ''}"
        ),
    )

    if not st.button("📥 SRTを生成", use_container_width=True):
        return

    progress_bar = st.progress(0.0)
    status = st.empty()

    def progress_callback(progress: float) -> None:
        progress_bar.progress(progress)
        status.text(f"書き出し中... {progress:.0%}")

    file_path = output_path_for(video_id, selected)
    try:
        init_client().download(selected, file_path, progress_callback=progress_callback)
    except (CaptionsError, OSError) as e:
        logger.error(f"[APP] SRT生成失敗: {e}", exc_info=True)
        st.error(f"SRTの生成に失敗しました: {e}")
        return

    progress_bar.progress(1.0)
    status.text(f"📁 {file_path}")
    logger.info(f"[APP] SRT保存完了: {file_path}")

    srt_content = file_path.read_text(encoding="utf-8")
    st.download_button(
        "💾 SRTをダウンロード",
        data=srt_content,
        file_name=file_path.name,
        mime="application/x-subrip",
    )
    with st.expander("プレビュー（先頭1000文字）"):
        st.text(srt_content[:1000])


def main() -> None:
    """Streamlitアプリケーションのメイン関数"""
    st.set_page_config(
        page_title="ytcaptions",
        page_icon="📝",
        layout="centered",
    )

    if "manifest" not in st.session_state:
        st.session_state.manifest = None
        st.session_state.video_id = None

    # LangSmith状態と設定をサイドバーに表示
    with st.sidebar:
        if is_langsmith_enabled():
            project = os.getenv("LANGSMITH_PROJECT", "default")
            st.success(f"🔍 LangSmith: 有効 (project: {project})")
        else:
            st.info("🔍 LangSmith: 無効")

        st.header("⚙️ 設定")
        include_auto = st.checkbox("自動生成字幕を含める", value=True)

    st.title("📝 ytcaptions")
    st.markdown("YouTube動画の字幕をSRT形式でダウンロード")

    with st.form("video_form"):
        video_input = st.text_input(
            "🎥 動画URLまたは動画ID",
            placeholder="例: https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        )
        submitted = st.form_submit_button("🔎 字幕を探す", use_container_width=True)

    if submitted and video_input:
        load_manifest(video_input)

    if st.session_state.manifest is not None:
        render_track_download(
            st.session_state.video_id,
            st.session_state.manifest,
            include_auto,
        )


if __name__ == "__main__":
    main()
