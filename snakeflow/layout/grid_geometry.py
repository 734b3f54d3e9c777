"""
网格几何 - 由页面尺寸与边距/间距计算4×3格子

    cell_width  = (页宽 - 2*margin - 2*gap) / 3
    cell_height = (页高 - 2*margin - 3*gap) / 4
    center(row, col) = (margin + col*(cw+gap) + cw/2, margin + row*(ch+gap) + ch/2)

坐标相对页面左上角。纯计算，无副作用；每页单独计算。
"""

from __future__ import annotations

from dataclasses import dataclass

from ..interfaces import ConfigurationError
from ..models import GRID_COLS, GRID_ROWS, Bounds, Point


@dataclass(frozen=True)
class GridGeometry:
    """单页网格几何"""
    page_width: float
    page_height: float
    margin: float
    gap: float
    rows: int = GRID_ROWS
    cols: int = GRID_COLS

    def __post_init__(self) -> None:
        if self.cell_width <= 0 or self.cell_height <= 0:
            raise ConfigurationError(
                f"页面过小: {self.page_width}x{self.page_height} "
                f"(margin={self.margin}, gap={self.gap})"
            )

    @classmethod
    def from_page(cls, bounds: Bounds, margin: float, gap: float) -> GridGeometry:
        return cls(page_width=bounds.width, page_height=bounds.height, margin=margin, gap=gap)

    @property
    def inner_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def inner_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def cell_width(self) -> float:
        return (self.inner_width - (self.cols - 1) * self.gap) / self.cols

    @property
    def cell_height(self) -> float:
        return (self.inner_height - (self.rows - 1) * self.gap) / self.rows

    def cell_center(self, row: int, col: int) -> Point:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"格子越界: ({row}, {col})")
        x = self.margin + col * (self.cell_width + self.gap) + self.cell_width / 2
        y = self.margin + row * (self.cell_height + self.gap) + self.cell_height / 2
        return Point(x=x, y=y)

    def cell_bounds(self, row: int, col: int) -> Bounds:
        center = self.cell_center(row, col)
        return Bounds(
            top=center.y - self.cell_height / 2,
            left=center.x - self.cell_width / 2,
            bottom=center.y + self.cell_height / 2,
            right=center.x + self.cell_width / 2,
        )

    def inner_bounds(self) -> Bounds:
        """边距以内的区域"""
        return Bounds(
            top=self.margin,
            left=self.margin,
            bottom=self.page_height - self.margin,
            right=self.page_width - self.margin,
        )
