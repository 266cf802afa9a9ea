"""聊天导入与归一化层。

提供一个统一入口：把不同聊天工具导出的 JSON 文档归一化为按顺序编号的
“一问一答”列表，供网页 / 命令行展示。
"""

from .enums import FAILURE_MESSAGES, FailureKind, SourceKind
from .errors import (
    ChatImportError,
    FileReadError,
    FileTooLargeError,
    MalformedInputError,
    NoConversationsFoundError,
    UnsupportedFileTypeError,
)
from .loader import load_chat_bytes, load_chat_file, normalize, parse_document
from .schema import SENTINEL_PROMPT, Exchange, LoadResult, NormalizationResult

__all__ = [
    "normalize",
    "parse_document",
    "load_chat_file",
    "load_chat_bytes",
    "Exchange",
    "LoadResult",
    "NormalizationResult",
    "SENTINEL_PROMPT",
    "FailureKind",
    "SourceKind",
    "FAILURE_MESSAGES",
    "ChatImportError",
    "MalformedInputError",
    "NoConversationsFoundError",
    "UnsupportedFileTypeError",
    "FileReadError",
    "FileTooLargeError",
]
