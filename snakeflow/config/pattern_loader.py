"""
图案表加载器 - 读取 patterns.yaml

职责：
- 解析YAML并提供结构化访问
- 缓存加载结果（避免重复解析）
- 不做业务校验（由 PatternCatalog 负责）

使用方式：
    table = PatternLoader.load()
    raw = table.patterns[1]
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from ..interfaces import ConfigurationError

DEFAULT_PATTERNS_PATH = Path(__file__).with_name("patterns.yaml")


class PatternTable(BaseModel):
    """图案表（patterns.yaml 的结构化表示）"""
    schema_version: str
    patterns: dict[int, dict[str, Any]] = Field(default_factory=dict)


class PatternLoader:
    """图案表加载器（缓存）"""

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, patterns_path: str | Path = DEFAULT_PATTERNS_PATH) -> PatternTable:
        """加载并缓存图案表"""
        path = Path(patterns_path)
        if not path.exists():
            raise ConfigurationError(f"图案表不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(f"图案表格式错误: {path}")

        try:
            return PatternTable(**data)
        except ValidationError as e:
            raise ConfigurationError(f"图案表结构错误: {path}: {e}") from e

    @classmethod
    def reload(cls, patterns_path: str | Path = DEFAULT_PATTERNS_PATH) -> PatternTable:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(patterns_path)


# 便捷函数
def load_patterns(patterns_path: str | Path | None = None) -> PatternTable:
    """加载图案表"""
    return PatternLoader.load(patterns_path or DEFAULT_PATTERNS_PATH)
