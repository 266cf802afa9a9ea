"""聊天导入层：通用核心逻辑（纯函数/小工具）。

这里聚合：
- 字段探测规则（按固定优先级逐条尝试，返回第一个命中）
- 用户消息判定（RoleClassifier）
- 提示文本抽取
- 一问一答配对（ExchangeExtractor）

说明：
- 消息的角色/文本字段都是“推断”出来的，从不假定存在
- 单条消息字段异常一律走兜底值，不抛异常
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from .schema import SENTINEL_PROMPT, ExtractedExchange


USER_ROLE = "user"

# 会话里消息序列可能使用的 key（按优先级）
MESSAGE_SEQUENCE_KEYS = ("messages", "turns", "exchanges")

# 提示文本可能所在的字段（按优先级）
PROMPT_TEXT_FIELDS = ("content", "text", "message", "prompt")


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def has_value(value: Any) -> bool:
    """字段是否“有内容”：None、空串、空容器、0/False 都视为没有。"""

    if value is None:
        return False
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) > 0
    if isinstance(value, (int, float)):
        return value != 0
    return True


# -------------------------
# 字段探测规则
# -------------------------


@dataclass(frozen=True)
class FieldRule:
    name: str
    field: str
    test: Callable[[Any], bool]

    def matches(self, obj: Any) -> bool:
        if not isinstance(obj, dict) or self.field not in obj:
            return False
        return self.test(obj[self.field])


def first_match(obj: Any, rules: Iterable[FieldRule]) -> Optional[FieldRule]:
    for rule in rules:
        if rule.matches(obj):
            return rule
    return None


def first_value(obj: Any, fields: Sequence[str], accept: Callable[[Any], bool] = has_value) -> Tuple[Optional[str], Any]:
    """返回 (字段名, 值)；都不满足时返回 (None, None)。"""

    if not isinstance(obj, dict):
        return None, None
    for name in fields:
        value = obj.get(name)
        if accept(value):
            return name, value
    return None, None


def _is_user_literal(value: Any) -> bool:
    # 精确、区分大小写："superuser" / "User" 都不算
    return isinstance(value, str) and value == USER_ROLE


def _mentions_user(value: Any) -> bool:
    return isinstance(value, str) and USER_ROLE in value.lower()


USER_RULES: Tuple[FieldRule, ...] = (
    FieldRule("role", "role", _is_user_literal),
    FieldRule("sender", "sender", _is_user_literal),
    FieldRule("type", "type", _is_user_literal),
    FieldRule("from", "from", _is_user_literal),
    FieldRule("author", "author", _mentions_user),
)


# -------------------------
# 角色判定 / 文本抽取
# -------------------------


def is_user_message(message: Any) -> bool:
    """按 USER_RULES 顺序判断是否为用户发言；非 dict 消息一律不是。"""

    return first_match(message, USER_RULES) is not None


def as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    # 结构化内容（如 {"parts": [...]}）按 JSON 文本展示
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def extract_prompt_text(message: Any) -> str:
    """content > text > message > prompt > 消息本身是字符串 > 兜底文案。"""

    name, value = first_value(message, PROMPT_TEXT_FIELDS)
    if name is not None:
        return as_text(value)

    if isinstance(message, str) and message:
        return message

    return SENTINEL_PROMPT


def conversation_messages(conversation: Any) -> Optional[list]:
    """取会话的消息序列：第一个值为数组的别名 key；都没有则返回 None。"""

    name, value = first_value(conversation, MESSAGE_SEQUENCE_KEYS, accept=is_sequence)
    return value if name is not None else None


# -------------------------
# 一问一答配对
# -------------------------


def find_corresponding_response(messages: Sequence[Any], user_index: int) -> Any:
    """从 user_index 之后找第一条非用户消息；找不到返回 None。"""

    for i in range(user_index + 1, len(messages)):
        candidate = messages[i]
        if not is_user_message(candidate):
            return candidate
    return None


def extract_exchanges(messages: Sequence[Any]) -> List[ExtractedExchange]:
    """连续多条用户消息可能落到同一条回复上（各自独立向后查找）。"""

    out: List[ExtractedExchange] = []
    for idx, message in enumerate(messages):
        if not is_user_message(message):
            continue
        out.append(ExtractedExchange(
            prompt=extract_prompt_text(message),
            response=find_corresponding_response(messages, idx),
            message_index=idx,
        ))
    return out
