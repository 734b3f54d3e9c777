"""
配置层 - 加载图案表与运行期配置

职责：
- 加载 config/patterns.yaml（图案表）
- 加载运行期YAML（网格/样式/图层等参数）
- 提供类型安全的配置访问接口
"""

from .pattern_loader import DEFAULT_PATTERNS_PATH, PatternLoader, PatternTable, load_patterns
from .runtime_config import (
    CurveConfig,
    GridConfig,
    LayerConfig,
    LoggingConfig,
    NumberingConfig,
    PathStyleConfig,
    RuntimeConfig,
    SelectionConfig,
    get_config,
    reload_config,
)

__all__ = [
    "PatternLoader",
    "PatternTable",
    "DEFAULT_PATTERNS_PATH",
    "load_patterns",
    "RuntimeConfig",
    "GridConfig",
    "PathStyleConfig",
    "LayerConfig",
    "SelectionConfig",
    "CurveConfig",
    "NumberingConfig",
    "LoggingConfig",
    "get_config",
    "reload_config",
]
