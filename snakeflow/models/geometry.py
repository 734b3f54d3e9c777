"""
几何模型 - 点/边界框/描边样式

坐标系与宿主一致：原点在页面左上角，y向下增长。
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Point(BaseModel):
    """二维坐标"""
    x: float
    y: float

    model_config = {"frozen": True}

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


class Bounds(BaseModel):
    """边界框 (top, left, bottom, right)"""
    top: float
    left: float
    bottom: float
    right: float

    model_config = {"frozen": True}

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> Point:
        return Point(x=(self.left + self.right) / 2, y=(self.top + self.bottom) / 2)

    def centered_at(self, center: Point) -> Bounds:
        """保持宽高，将中心移到指定点"""
        half_w = self.width / 2
        half_h = self.height / 2
        return Bounds(
            top=center.y - half_h,
            left=center.x - half_w,
            bottom=center.y + half_h,
            right=center.x + half_w,
        )

    def contains(self, point: Point) -> bool:
        """判断点是否在框内（含边界）"""
        return self.left <= point.x <= self.right and self.top <= point.y <= self.bottom


class PathStyle(BaseModel):
    """连线描边样式"""
    stroke_color: str = "Black"
    stroke_tint: float = Field(20, description="描边色调(%)")
    stroke_weight: float = Field(20, description="描边粗细(pt)")
    fill_color: str = "None"
