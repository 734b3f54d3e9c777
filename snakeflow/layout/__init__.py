"""
网格排版模块 - 图案/几何/落位/编号/连线

子模块：
- catalog: 图案目录（加载校验）
- grid_geometry: 4×3格子计算
- placement: 按图案落位元素
- renumber: 按流序编号
- path_synth: 连线生成与平滑点转换
"""

from .catalog import PATTERN_COUNT, PatternCatalog, get_catalog
from .grid_geometry import GridGeometry
from .path_synth import PathSynthesizer, ordered_points
from .placement import GridPlacementEngine
from .renumber import FlowRenumberer, list_name_for

__all__ = [
    "PatternCatalog",
    "PATTERN_COUNT",
    "get_catalog",
    "GridGeometry",
    "GridPlacementEngine",
    "FlowRenumberer",
    "list_name_for",
    "PathSynthesizer",
    "ordered_points",
]
