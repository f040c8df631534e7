"""
空间匹配层 - 坐标索引与评论匹配
"""

from .bounds_index import build_bounds_index
from .comment_matcher import CommentMatcher, categorize_instruction

__all__ = [
    "build_bounds_index",
    "CommentMatcher",
    "categorize_instruction",
]
