from __future__ import annotations

from pathlib import Path
from typing import Any

from src.config import Config
from src.chat_import import ChatImportError, FileTooLargeError, LoadResult, load_chat_bytes, load_chat_file
from src.chat_import.enums import FailureKind
from src.utils import format_response_json, truncate_text


# texts 目录中允许的输入文件类型
ALLOWED_SUFFIXES = {'.json'}


_LOAD_CACHE: dict[str, dict[str, Any]] = {}

# 失败类别 -> HTTP 状态码
FAILURE_STATUS = {
    FailureKind.MALFORMED_INPUT: 400,
    FailureKind.UNSUPPORTED_FILE_TYPE: 400,
    FailureKind.FILE_READ_ERROR: 500,
    FailureKind.NO_CONVERSATIONS_FOUND: 422,
    FailureKind.FILE_TOO_LARGE: 413,
}


def texts_dir() -> Path:
    return Path(Config.TEXTS_DIR)


def safe_texts_file_path(filename: str) -> Path:
    """把用户输入的文件名映射到 texts/ 下，仅允许 .json。"""
    if not filename or not isinstance(filename, str):
        raise ValueError('未指定文件名')

    base = texts_dir().resolve()
    candidate = (base / filename).resolve()

    if base not in candidate.parents and candidate != base:
        raise ValueError('非法文件路径')

    if candidate.suffix.lower() not in ALLOWED_SUFFIXES:
        raise ValueError('不支持的文件类型')

    return candidate


def parse_bool_query(value: str | None, *, default: bool = False) -> bool:
    if value is None:
        return default
    s = str(value).strip().lower()
    if s in ('1', 'true', 'yes', 'on'):
        return True
    if s in ('0', 'false', 'no', 'off'):
        return False
    return default


def error_payload(error: ChatImportError) -> tuple[dict[str, Any], int]:
    """ChatImportError -> (JSON 响应体, 状态码)；每类失败只给一条用户可读提示。"""
    return (
        {'success': False, 'error': error.user_message, 'kind': error.kind.name},
        FAILURE_STATUS.get(error.kind, 400),
    )


def file_info(loaded: LoadResult) -> dict[str, Any]:
    return {
        'file_name': loaded.file_name,
        'conversation_count': loaded.conversation_count,
        'exchange_count': len(loaded.exchanges),
    }


def build_display_entries(loaded: LoadResult, *, max_chars: int | None = None,
                          include_responses: bool = True) -> list[dict[str, Any]]:
    """每条问答生成一个展示条目：编号、截断后的标题、格式化后的回复。"""
    if max_chars is None:
        max_chars = Config.PROMPT_LABEL_MAX_CHARS
    if max_chars < 1:
        raise ValueError(f'max_chars 必须大于 0: {max_chars}')

    entries = []
    for ex in loaded.exchanges:
        entry = {
            'number': ex.sequence_number,
            'label': f"{ex.sequence_number}. {truncate_text(ex.prompt, max_chars)}",
            'prompt': ex.prompt,
            'conversation_index': ex.conversation_index,
            'within_conversation_index': ex.within_conversation_index,
            'source_kind': ex.source_kind.name.lower(),
            'message_index': ex.message_index,
            'request_id': ex.request_id,
        }
        if include_responses:
            entry['response'] = ex.response
            entry['response_json'] = format_response_json(ex.response, indent=Config.RESPONSE_JSON_INDENT)
        entries.append(entry)

    return entries


def load_uploaded_file(raw: bytes, filename: str) -> LoadResult:
    """处理上传（拖拽/选择文件）的 JSON；不缓存。"""
    return load_chat_bytes(raw, filename)


def load_texts_file(filename: str) -> LoadResult:
    """从 texts/ 加载并归一化；按 (文件名, mtime) 缓存。"""
    filepath = safe_texts_file_path(filename)
    if not filepath.exists():
        raise FileNotFoundError('文件不存在')

    stat = filepath.stat()
    size_mb = stat.st_size / (1024 * 1024)
    if size_mb > Config.MAX_FILE_SIZE_MB:
        raise FileTooLargeError(f'{size_mb:.2f}MB > {Config.MAX_FILE_SIZE_MB}MB')

    cache_key = str(filepath)
    file_mtime = stat.st_mtime
    cached = _LOAD_CACHE.get(cache_key)
    if cached and cached.get('mtime') == file_mtime:
        return cached['loaded']

    loaded = load_chat_file(str(filepath))

    _LOAD_CACHE[cache_key] = {
        'mtime': file_mtime,
        'loaded': loaded,
    }

    return loaded


def clear_cache() -> None:
    _LOAD_CACHE.clear()
