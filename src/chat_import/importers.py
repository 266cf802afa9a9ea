"""聊天导入层：文档形状识别与具体格式适配。

目前支持两类会话形状：
- TAGGED：顶层带 requests 数组的导出（例如 VS Code Copilot chat.json），
  每个 request 本身就是一问一答，没有通用的消息序列
- GENERIC：会话对象在 messages/turns/exchanges 下带有按角色标记的消息序列

识别顺序（命中即停，1-4 互斥）：
1. 顶层 dict 且 requests 为数组          -> 每个元素一个 TaggedCandidate
2. 顶层本身是数组                        -> 每个元素一个 GenericCandidate
3. 顶层 dict 且 conversations 为数组     -> 每个元素一个 GenericCandidate
4. 顶层 dict 且 messages 为数组          -> 整个文档作为一个 GenericCandidate
5. 兜底：按 key 在文档中的原始顺序，把所有数组值的元素拼接为 GenericCandidate

第 5 条依赖 key 顺序（json 模块的 dict 保持源文件顺序），属于尽力而为的启发式。
"""

from __future__ import annotations

from typing import Any, List

from .core import as_text, conversation_messages, has_value, is_sequence
from .schema import SENTINEL_PROMPT, ConversationCandidate, ExtractedExchange, GenericCandidate, TaggedCandidate


# -------------------------
# 形状识别（FormatDetector）
# -------------------------


def _list_under(document: Any, key: str):
    if isinstance(document, dict) and is_sequence(document.get(key)):
        return document[key]
    return None


def detect_candidates(document: Any) -> List[ConversationCandidate]:
    requests = _list_under(document, "requests")
    if requests is not None:
        return [TaggedCandidate(request=r) for r in requests]

    if is_sequence(document):
        return [GenericCandidate(value=v) for v in document]

    conversations = _list_under(document, "conversations")
    if conversations is not None:
        return [GenericCandidate(value=v) for v in conversations]

    if _list_under(document, "messages") is not None:
        return [GenericCandidate(value=document)]

    out: List[ConversationCandidate] = []
    if isinstance(document, dict):
        for value in document.values():
            if is_sequence(value):
                out.extend(GenericCandidate(value=v) for v in value)
    return out


# -------------------------
# 会话校验（ConversationValidator）
# -------------------------


def is_valid_conversation(candidate: Any) -> bool:
    """不合法的候选直接丢弃，不作为错误上报。"""

    if isinstance(candidate, TaggedCandidate):
        return candidate.request is not None
    if isinstance(candidate, GenericCandidate):
        return conversation_messages(candidate.value) is not None
    return False


# -------------------------
# TAGGED：单 request 适配
# -------------------------


def _text_parts(parts: Any) -> List[str]:
    if not is_sequence(parts):
        return []

    texts: List[str] = []
    for part in parts:
        if not isinstance(part, dict) or part.get("kind") != "text":
            continue
        text = part.get("text")
        if not has_value(text):
            continue
        texts.append(as_text(text))
    return texts


def _tagged_prompt(request: Any) -> str:
    message = request.get("message") if isinstance(request, dict) else None
    if not isinstance(message, dict):
        return SENTINEL_PROMPT

    text = message.get("text")
    if has_value(text):
        return as_text(text)

    if "parts" in message:
        return "\n".join(_text_parts(message.get("parts"))) or SENTINEL_PROMPT

    return SENTINEL_PROMPT


def extract_tagged_request(request: Any) -> ExtractedExchange:
    """一个 request 恰好产出一条问答；没有 response 字段时把整个 request 作为回复。"""

    response = request.get("response") if isinstance(request, dict) else None
    if response is None:
        response = request

    request_id = request.get("requestId") if isinstance(request, dict) else None

    return ExtractedExchange(
        prompt=_tagged_prompt(request),
        response=response,
        request_id=request_id,
    )
