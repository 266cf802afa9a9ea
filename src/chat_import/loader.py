"""统一加载入口。

这里是 app.py / main.py 应当使用的唯一入口：
- normalize：纯函数，文档 -> 候选 -> 校验 -> 问答 -> 全局编号
- load_chat_file / load_chat_bytes：读取 + 解析 JSON + normalize
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, List, Union

from .core import conversation_messages, extract_exchanges
from .enums import FailureKind, SourceKind
from .errors import FileReadError, MalformedInputError, UnsupportedFileTypeError
from .importers import detect_candidates, extract_tagged_request, is_valid_conversation
from .schema import (
    ConversationCandidate,
    Exchange,
    ExtractedExchange,
    GenericCandidate,
    LoadResult,
    NormalizationResult,
    TaggedCandidate,
)


logger = logging.getLogger(__name__)

ALLOWED_SUFFIX = ".json"


def _extract(candidate: ConversationCandidate) -> List[ExtractedExchange]:
    if isinstance(candidate, TaggedCandidate):
        return [extract_tagged_request(candidate.request)]
    if isinstance(candidate, GenericCandidate):
        return extract_exchanges(conversation_messages(candidate.value) or [])
    raise TypeError(f"未知的会话候选类型: {type(candidate).__name__}")


def _source_kind(candidate: ConversationCandidate) -> SourceKind:
    return SourceKind.TAGGED if isinstance(candidate, TaggedCandidate) else SourceKind.GENERIC


def normalize(document: Any) -> NormalizationResult:
    """把任意 JSON 文档归一化为按顺序编号的问答列表。

    只有“没有任何合法会话”会作为失败返回；单条消息的异常都在下层走兜底值。
    """

    candidates = detect_candidates(document)
    if not candidates:
        return NormalizationResult(failure=FailureKind.NO_CONVERSATIONS_FOUND)

    conversations = [c for c in candidates if is_valid_conversation(c)]
    dropped = len(candidates) - len(conversations)
    if dropped:
        logger.debug(f"Dropped {dropped} of {len(candidates)} conversation candidates")
    if not conversations:
        return NormalizationResult(
            failure=FailureKind.NO_CONVERSATIONS_FOUND,
            dropped_candidates=dropped,
        )

    exchanges: List[Exchange] = []
    sequence_number = 1
    for conv_index, candidate in enumerate(conversations):
        kind = _source_kind(candidate)
        for within_index, item in enumerate(_extract(candidate)):
            exchanges.append(Exchange(
                prompt=item.prompt,
                response=item.response,
                sequence_number=sequence_number,
                conversation_index=conv_index,
                within_conversation_index=within_index,
                source_kind=kind,
                message_index=item.message_index,
                request_id=item.request_id,
            ))
            sequence_number += 1

    return NormalizationResult(
        exchanges=tuple(exchanges),
        conversation_count=len(conversations),
        dropped_candidates=dropped,
    )


# -------------------------
# 读取层（文件 / 上传字节）
# -------------------------


def parse_document(text: Union[str, bytes]) -> Any:
    """解析原始文本；json 的 dict 保持源文件 key 顺序（识别规则 5 依赖这一点）。"""

    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise MalformedInputError(str(e)) from e
    elif not isinstance(text, str):
        raise MalformedInputError(f"expected text, got {type(text).__name__}")
    elif text.startswith("\ufeff"):
        text = text[1:]

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedInputError(f"line {e.lineno} column {e.colno}") from e


def check_file_name(file_name: str) -> None:
    if not file_name or not str(file_name).lower().endswith(ALLOWED_SUFFIX):
        raise UnsupportedFileTypeError(str(file_name or ""))


def _build_load_result(file_name: str, document: Any) -> LoadResult:
    result = normalize(document).raise_for_failure()

    warnings: List[str] = []
    if result.dropped_candidates:
        warnings.append(f"忽略了 {result.dropped_candidates} 个不符合会话结构的候选")

    logger.info(
        f"Loaded {file_name}: {result.conversation_count} conversations, "
        f"{len(result.exchanges)} exchanges"
    )
    return LoadResult(file_name=file_name, result=result, warnings=warnings)


def load_chat_bytes(raw: bytes, file_name: str) -> LoadResult:
    check_file_name(file_name)
    return _build_load_result(file_name, parse_document(raw))


def load_chat_file(file_path: str) -> LoadResult:
    file_name = os.path.basename(file_path)
    check_file_name(file_name)

    try:
        with open(file_path, "rb") as f:
            raw = f.read()
    except OSError as e:
        logger.error(f"Error reading {file_path}: {e}")
        raise FileReadError(str(e)) from e

    return _build_load_result(file_name, parse_document(raw))
