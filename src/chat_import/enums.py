from __future__ import annotations

from enum import IntEnum


# FailureKind - 导入失败类别
class FailureKind(IntEnum):
    MALFORMED_INPUT = 1  # 原始文本无法解析为 JSON（由读取层负责）
    NO_CONVERSATIONS_FOUND = 2  # 没有任何通过校验的会话
    UNSUPPORTED_FILE_TYPE = 3  # 文件后缀不是 .json
    FILE_READ_ERROR = 4  # 读取文件失败
    FILE_TOO_LARGE = 5  # 文件超过 MAX_FILE_SIZE_MB


## SourceKind - 会话来源形状
class SourceKind(IntEnum):
    GENERIC = 0  # 带 messages/turns/exchanges 消息序列的通用格式
    TAGGED = 1  # 顶层 requests 数组（每个 request 即一问一答）


# 每种失败只对应一条面向用户的提示
FAILURE_MESSAGES = {
    FailureKind.MALFORMED_INPUT: "Invalid JSON file. Please check the file format.",
    FailureKind.NO_CONVERSATIONS_FOUND: "No valid conversations found in the JSON file.",
    FailureKind.UNSUPPORTED_FILE_TYPE: "Please select a JSON file.",
    FailureKind.FILE_READ_ERROR: "Error reading file. Please try again.",
    FailureKind.FILE_TOO_LARGE: "File is too large.",
}


__all__ = [
    "FailureKind",
    "SourceKind",
    "FAILURE_MESSAGES",
]
