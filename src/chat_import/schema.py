"""聊天归一化数据模型。

目标：
- 把不同聊天工具导出的 JSON 统一为“一问一答”（Exchange）的扁平列表，便于按顺序展示
- 会话候选是一个封闭的联合类型：TaggedCandidate | GenericCandidate

说明：
- response 始终是文档里的原始对象（同一引用），不复制、不重新序列化
- 文档的 key 顺序依赖 json 模块的 dict（保持源文件顺序）
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from .enums import FailureKind, SourceKind
from .errors import error_for_kind


# 找不到任何提示文本时的兜底值
SENTINEL_PROMPT = "No prompt text found"


@dataclass(frozen=True)
class TaggedCandidate:
    # requests 数组中的一个原始 request
    request: Any


@dataclass(frozen=True)
class GenericCandidate:
    # 期望在 messages/turns/exchanges 下带有消息序列的原始值
    value: Any


ConversationCandidate = Union[TaggedCandidate, GenericCandidate]


@dataclass(frozen=True)
class ExtractedExchange:
    """编号前的一问一答。"""

    prompt: str
    response: Any = None
    message_index: Optional[int] = None
    request_id: Any = None


@dataclass(frozen=True)
class Exchange:
    prompt: str
    response: Any
    sequence_number: int
    conversation_index: int
    within_conversation_index: int

    source_kind: SourceKind = SourceKind.GENERIC

    # GENERIC：用户消息在会话消息序列中的下标
    message_index: Optional[int] = None
    # TAGGED：request.requestId（如存在）
    request_id: Any = None


@dataclass(frozen=True)
class NormalizationResult:
    exchanges: Tuple[Exchange, ...] = ()
    conversation_count: int = 0
    failure: Optional[FailureKind] = None

    # 被校验丢弃的候选数量（不是错误，仅供提示）
    dropped_candidates: int = 0

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> "NormalizationResult":
        if self.failure is not None:
            raise error_for_kind(self.failure)
        return self


@dataclass
class LoadResult:
    file_name: str
    result: NormalizationResult
    warnings: List[str] = field(default_factory=list)

    @property
    def exchanges(self) -> Tuple[Exchange, ...]:
        return self.result.exchanges

    @property
    def conversation_count(self) -> int:
        return self.result.conversation_count
