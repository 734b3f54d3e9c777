"""
宿主文档实现

- memory: 内存文档（测试与演示用）
"""

from .memory import (
    MemoryDocument,
    MemoryElement,
    MemoryLayer,
    MemoryList,
    MemoryPage,
    MemoryPathItem,
    MemoryPathPoint,
)

__all__ = [
    "MemoryDocument",
    "MemoryElement",
    "MemoryLayer",
    "MemoryList",
    "MemoryPage",
    "MemoryPathItem",
    "MemoryPathPoint",
]
