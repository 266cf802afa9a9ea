"""
通用工具模块 - 展示层的公共代码

包含:
- 标题截断
- 回复 JSON 格式化
- 分页
"""

import json
from typing import Any, List, Sequence, Tuple


# ==================== 常量定义 ====================

ELLIPSIS = '...'

DEFAULT_LABEL_MAX_CHARS = 100


# ==================== 文本工具 ====================

def truncate_text(text: str, max_length: int = DEFAULT_LABEL_MAX_CHARS) -> str:
    """
    截断文本用于标题展示

    Args:
        text: 原始文本
        max_length: 保留的最大字符数（不含省略号）

    Returns:
        未超长时原样返回，否则保留前 max_length 个字符并追加 '...'
    """
    if text is None:
        return ''
    if len(text) <= max_length:
        return text
    return text[:max_length] + ELLIPSIS


def format_response_json(response: Any, indent: int = 2) -> str:
    """把原始回复格式化为缩进 JSON（保持 key 原始顺序，不转义中文）"""
    try:
        return json.dumps(response, indent=indent, ensure_ascii=False)
    except (TypeError, ValueError):
        # 调用方自行构造的文档可能带有非 JSON 值
        return json.dumps(response, indent=indent, ensure_ascii=False, default=str)


# ==================== 分页 ====================

def paginate(items: Sequence[Any], page: int, page_size: int) -> Tuple[List[Any], int]:
    """
    返回 (当前页数据, 总页数)；page 从 1 开始
    """
    page = max(1, page)
    page_size = max(1, page_size)
    total_pages = (len(items) + page_size - 1) // page_size
    start = (page - 1) * page_size
    return list(items[start:start + page_size]), total_pages
