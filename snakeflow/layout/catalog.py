"""
图案目录 - 经过校验的10种蛇形图案

职责：
1. 从图案表构建 Pattern 实例
2. 加载时逐项校验（网格/流序双射、流序=网格行优先展开）
3. 按ID提供图案，未知ID抛 UnknownPatternError

测试要点：
- test_flow_equals_row_major: 流序与网格一致
- test_unknown_pattern: 越界ID
- test_invalid_table_rejected: 不一致的图案表在加载时失败
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator

from pydantic import ValidationError

from ..config import PatternTable, load_patterns
from ..interfaces import ConfigurationError, UnknownPatternError
from ..models import GRID_COLS, GRID_ROWS, SLOTS_PER_PAGE, Pattern

PATTERN_COUNT = 10


class PatternCatalog:
    """图案目录（构建后只读）"""

    def __init__(self, patterns: dict[int, Pattern]):
        self._patterns = dict(sorted(patterns.items()))

    @classmethod
    def from_table(cls, table: PatternTable) -> PatternCatalog:
        """从图案表构建并校验"""
        expected_ids = set(range(1, PATTERN_COUNT + 1))
        if set(table.patterns) != expected_ids:
            raise ConfigurationError(
                f"图案ID必须为1..{PATTERN_COUNT}: {sorted(table.patterns)}"
            )

        patterns = {}
        for pattern_id, raw in table.patterns.items():
            pattern = cls._build(pattern_id, raw)
            cls.validate(pattern)
            patterns[pattern_id] = pattern
        return cls(patterns)

    @classmethod
    def load(cls, patterns_path: str | Path | None = None) -> PatternCatalog:
        """加载图案表文件并构建目录"""
        return cls.from_table(load_patterns(patterns_path))

    @staticmethod
    def _build(pattern_id: int, raw: dict[str, Any]) -> Pattern:
        try:
            return Pattern(id=pattern_id, **raw)
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(f"图案{pattern_id}结构错误: {e}") from e

    @staticmethod
    def validate(pattern: Pattern) -> None:
        """
        校验单个图案

        Raises:
            ConfigurationError: 网格形状/槽位集合/流序任一不一致
        """
        prefix = f"图案{pattern.id}({pattern.name})"
        if len(pattern.grid) != GRID_ROWS or any(len(row) != GRID_COLS for row in pattern.grid):
            raise ConfigurationError(f"{prefix} 网格必须为{GRID_ROWS}×{GRID_COLS}")

        full = list(range(SLOTS_PER_PAGE))
        flattened = pattern.row_major()
        if sorted(flattened) != full:
            raise ConfigurationError(f"{prefix} 网格槽位必须恰好为0..{SLOTS_PER_PAGE - 1}: {flattened}")

        if sorted(pattern.flow) != full:
            raise ConfigurationError(f"{prefix} 流序必须是0..{SLOTS_PER_PAGE - 1}的排列: {list(pattern.flow)}")

        if list(pattern.flow) != flattened:
            raise ConfigurationError(f"{prefix} 流序与网格行优先展开不一致")

    def get_pattern(self, pattern_id: int) -> Pattern:
        """按ID获取图案"""
        if isinstance(pattern_id, bool) or not isinstance(pattern_id, int):
            raise UnknownPatternError(f"图案ID必须为整数: {pattern_id!r}")
        pattern = self._patterns.get(pattern_id)
        if pattern is None:
            raise UnknownPatternError(f"未知图案: {pattern_id}（有效范围1..{len(self)}）")
        return pattern

    def ids(self) -> list[int]:
        return list(self._patterns)

    def names(self) -> list[str]:
        """图案名称（按ID升序）"""
        return [p.name for p in self._patterns.values()]

    def name_of(self, pattern_id: int) -> str:
        return self.get_pattern(pattern_id).name

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns.values())

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._patterns


_catalog: PatternCatalog | None = None


def get_catalog() -> PatternCatalog:
    """获取默认图案目录（惰性加载，校验失败即启动失败）"""
    global _catalog
    if _catalog is None:
        _catalog = PatternCatalog.load()
    return _catalog
