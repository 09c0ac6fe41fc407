"""Extension-based file classification.

``classify`` is total: every path maps to exactly one ``FileType``. Unknown
or missing extensions map to ``FileType.OTHER`` and are not text-based.
"""

from __future__ import annotations

from pathlib import PurePath

from localindex.index.models import FileType

_CODE_EXTS = {
    "swift", "m", "mm", "h", "c", "cc", "cpp", "hpp",
    "py", "js", "ts", "jsx", "tsx", "go", "rs", "java", "kt", "rb", "sh",
}
_DOC_TEXT_EXTS = {"md", "markdown", "txt", "rst"}
_DOC_BINARY_EXTS = {"rtf", "pdf"}
_CONFIG_EXTS = {"json", "yaml", "yml", "plist", "xml", "toml", "ini", "cfg", "conf"}
_IMAGE_EXTS = {"png", "jpg", "jpeg", "gif", "svg", "heic", "webp", "bmp"}
_VIDEO_EXTS = {"mp4", "mov", "avi", "mkv", "webm"}
_AUDIO_EXTS = {"mp3", "m4a", "wav", "aiff", "flac", "ogg"}

_TEXT_EXTS = _CODE_EXTS | _DOC_TEXT_EXTS | _CONFIG_EXTS

_TYPE_BY_EXT: dict[str, FileType] = {}
for _exts, _type in (
    (_CODE_EXTS, FileType.CODE),
    (_DOC_TEXT_EXTS | _DOC_BINARY_EXTS, FileType.DOCUMENTATION),
    (_CONFIG_EXTS, FileType.CONFIGURATION),
    (_IMAGE_EXTS, FileType.IMAGE),
    (_VIDEO_EXTS, FileType.VIDEO),
    (_AUDIO_EXTS, FileType.AUDIO),
):
    for _ext in _exts:
        _TYPE_BY_EXT[_ext] = _type


def extension_of(path: str | PurePath) -> str:
    """Lower-case extension of *path* without the leading dot ('' if none)."""
    return PurePath(path).suffix[1:].lower()


def classify(path: str | PurePath) -> tuple[FileType, bool]:
    """Return ``(file_type, is_text_based)`` for *path*."""
    ext = extension_of(path)
    return _TYPE_BY_EXT.get(ext, FileType.OTHER), ext in _TEXT_EXTS
