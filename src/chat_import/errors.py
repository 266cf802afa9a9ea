"""导入层异常。

只有两类失败会越过归一化边界：
- MALFORMED_INPUT：原始文本不是合法 JSON（读取层抛出）
- NO_CONVERSATIONS_FOUND：文档里没有任何合法会话

其余（文件类型、读取失败）属于读取层，同样以 ChatImportError 的子类抛出，
方便 web / CLI 统一处理。
"""

from __future__ import annotations

from typing import Optional

from .enums import FAILURE_MESSAGES, FailureKind


class ChatImportError(ValueError):
    kind: FailureKind = FailureKind.MALFORMED_INPUT

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__(self.user_message if not detail else f"{self.user_message} ({detail})")

    @property
    def user_message(self) -> str:
        return FAILURE_MESSAGES[self.kind]


class MalformedInputError(ChatImportError):
    kind = FailureKind.MALFORMED_INPUT


class NoConversationsFoundError(ChatImportError):
    kind = FailureKind.NO_CONVERSATIONS_FOUND


class UnsupportedFileTypeError(ChatImportError):
    kind = FailureKind.UNSUPPORTED_FILE_TYPE


class FileTooLargeError(ChatImportError):
    kind = FailureKind.FILE_TOO_LARGE


class FileReadError(ChatImportError):
    kind = FailureKind.FILE_READ_ERROR


_ERRORS_BY_KIND = {
    FailureKind.MALFORMED_INPUT: MalformedInputError,
    FailureKind.NO_CONVERSATIONS_FOUND: NoConversationsFoundError,
    FailureKind.UNSUPPORTED_FILE_TYPE: UnsupportedFileTypeError,
    FailureKind.FILE_READ_ERROR: FileReadError,
    FailureKind.FILE_TOO_LARGE: FileTooLargeError,
}


def error_for_kind(kind: FailureKind, detail: Optional[str] = None) -> ChatImportError:
    return _ERRORS_BY_KIND[kind](detail)


__all__ = [
    "ChatImportError",
    "MalformedInputError",
    "NoConversationsFoundError",
    "UnsupportedFileTypeError",
    "FileReadError",
    "FileTooLargeError",
    "error_for_kind",
]
