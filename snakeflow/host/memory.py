"""
内存文档模型 - IDocument 的参考实现

用于测试与命令行演示：页面/图层/编号列表/折线全部保存在内存中，
可通过 snapshot() 导出为普通字典查看排版结果。
"""

from __future__ import annotations

from itertools import count
from typing import Any, Sequence

from ..interfaces import (
    HostError,
    IDocument,
    IElement,
    ILayer,
    INumberingList,
    IPage,
    IPathItem,
    IPathPoint,
)
from ..models import Bounds, PathStyle, Point

# 默认页面尺寸（Letter, pt）
DEFAULT_PAGE_WIDTH = 612.0
DEFAULT_PAGE_HEIGHT = 792.0


class MemoryLayer(ILayer):
    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"MemoryLayer({self._name!r})"


class MemoryPage(IPage):
    def __init__(self, document: MemoryDocument, width: float, height: float):
        self._document = document
        self.width = width
        self.height = height

    @property
    def offset(self) -> int:
        return self._document.pages.index(self)

    @property
    def bounds(self) -> Bounds:
        return Bounds(top=0, left=0, bottom=self.height, right=self.width)

    def __repr__(self) -> str:
        return f"MemoryPage(offset={self.offset})"


class MemoryList(INumberingList):
    def __init__(self, name: str):
        self._name = name

    @property
    def name(self) -> str:
        return self._name


class MemoryStory:
    """承载编号的文本（只对第一段编号）"""

    def __init__(self, paragraphs: list[str]):
        self.paragraphs = paragraphs


class MemoryElement(IElement):
    """内存元素；paragraphs 不为None时具备编号能力"""

    _ids = count(1)

    def __init__(
        self,
        bounds: Bounds,
        page: IPage | None = None,
        paragraphs: list[str] | None = None,
        name: str | None = None,
    ):
        self.id = next(self._ids)
        self.name = name or f"item-{self.id}"
        self._bounds = bounds
        self._page = page
        self.story = MemoryStory(paragraphs) if paragraphs is not None else None

        self._applied_list: INumberingList | None = None
        self.start_number = 1
        self.static_number: int | None = None

    # --- 几何 ---

    def get_bounds(self) -> Bounds:
        return self._bounds

    def set_bounds(self, bounds: Bounds) -> None:
        self._bounds = bounds

    def move_to(self, top_left: Point) -> None:
        self._bounds = Bounds(
            top=top_left.y,
            left=top_left.x,
            bottom=top_left.y + self._bounds.height,
            right=top_left.x + self._bounds.width,
        )

    @property
    def page(self) -> IPage | None:
        return self._page

    def move_to_page(self, page: IPage) -> None:
        self._page = page

    # --- 编号 ---

    def has_numbering_capability(self) -> bool:
        return self.story is not None

    def get_parent_text_container(self) -> MemoryStory | None:
        if self.story is None or not self.story.paragraphs:
            return None
        return self.story

    @property
    def applied_list(self) -> INumberingList | None:
        return self._applied_list

    def set_numbering_list(self, numbering_list: INumberingList, start_number: int) -> None:
        self._require_story()
        self._applied_list = numbering_list
        self.start_number = start_number

    def clear_numbering(self) -> None:
        self._require_story()
        self._applied_list = None
        self.start_number = 1

    def convert_numbering_to_static_text(self) -> None:
        self._require_story()
        if self._applied_list is None:
            return
        self.static_number = self.start_number
        self.story.paragraphs[0] = f"{self.start_number}. {self.story.paragraphs[0]}"
        self._applied_list = None

    @property
    def display_number(self) -> int | None:
        """当前显示的编号（动态或静态）"""
        if self._applied_list is not None:
            return self.start_number
        return self.static_number

    def _require_story(self) -> None:
        if self.story is None:
            raise HostError(f"{self.name} 不支持编号")

    def __repr__(self) -> str:
        return f"MemoryElement({self.name!r})"


class MemoryPathPoint(IPathPoint):
    def __init__(self, anchor: Point):
        self._anchor = anchor
        self.left_direction = anchor
        self.right_direction = anchor
        self.point_type = "corner"

    @property
    def anchor(self) -> Point:
        return self._anchor

    def set_smooth(self) -> None:
        self.point_type = "smooth"

    def set_direction_handles(self, left: Point, right: Point) -> None:
        self.left_direction = left
        self.right_direction = right


class MemoryPathItem(IPathItem):
    def __init__(self, page: IPage, points: Sequence[Point], layer: ILayer):
        self.page = page
        self.layer = layer
        self.style: PathStyle | None = None
        self._points = [MemoryPathPoint(p) for p in points]

    def points(self) -> list[MemoryPathPoint]:
        return self._points

    @property
    def anchors(self) -> list[Point]:
        return [p.anchor for p in self._points]

    def apply_style(self, style: PathStyle) -> None:
        self.style = style

    def move_to_layer(self, layer: ILayer) -> None:
        self.layer = layer


class MemoryDocument(IDocument):
    """内存文档"""

    def __init__(
        self,
        page_count: int = 1,
        page_width: float = DEFAULT_PAGE_WIDTH,
        page_height: float = DEFAULT_PAGE_HEIGHT,
        layer_names: Sequence[str] = ("Layer 1",),
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.pages: list[MemoryPage] = []
        for _ in range(page_count):
            self.pages.append(MemoryPage(self, page_width, page_height))

        # 自底向上
        self._layers: list[MemoryLayer] = [MemoryLayer(n) for n in layer_names]
        self.lists: dict[str, MemoryList] = {}
        self.path_items: list[MemoryPathItem] = []
        self.selection: list[IPathItem] = []

    # --- 图层 ---

    def get_or_create_layer(self, name: str) -> MemoryLayer:
        for layer in self._layers:
            if layer.name == name:
                return layer
        layer = MemoryLayer(name)
        self._layers.append(layer)
        return layer

    def default_layer(self) -> MemoryLayer:
        if not self._layers:
            self._layers.append(MemoryLayer("Layer 1"))
        return self._layers[-1]

    def layers(self) -> list[MemoryLayer]:
        return list(self._layers)

    def position_layers(self, order: Sequence[ILayer]) -> None:
        ordered = [layer for layer in order if layer in self._layers]
        rest = [layer for layer in self._layers if layer not in ordered]
        self._layers = ordered + rest

    def layer_names(self) -> list[str]:
        return [layer.name for layer in self._layers]

    # --- 页面 ---

    def page_count(self) -> int:
        return len(self.pages)

    def page_at(self, offset: int) -> MemoryPage:
        if not 0 <= offset < len(self.pages):
            raise HostError(f"页面不存在: {offset}")
        return self.pages[offset]

    def append_page_after(self, page: IPage) -> MemoryPage:
        new_page = MemoryPage(self, self.page_width, self.page_height)
        self.pages.insert(page.offset + 1, new_page)
        return new_page

    # --- 编号列表 ---

    def get_or_create_list(self, name: str) -> MemoryList:
        if name not in self.lists:
            self.lists[name] = MemoryList(name)
        return self.lists[name]

    # --- 折线 ---

    def create_polyline(self, page: IPage, points: Sequence[Point]) -> MemoryPathItem:
        if len(points) < 2:
            raise HostError("折线至少需要2个点")
        item = MemoryPathItem(page, points, self.default_layer())
        self.path_items.append(item)
        return item

    def select(self, items: Sequence[IPathItem]) -> None:
        self.selection = list(items)

    # --- 便捷方法 ---

    def add_element(
        self,
        width: float = 100.0,
        height: float = 60.0,
        page: IPage | None = None,
        text: str | None = "Step",
        name: str | None = None,
    ) -> MemoryElement:
        """在页面左上角放一个元素；text为None时无编号能力"""
        page = page or self.pages[0]
        paragraphs = [text] if text is not None else None
        return MemoryElement(
            Bounds(top=0, left=0, bottom=height, right=width),
            page=page,
            paragraphs=paragraphs,
            name=name,
        )

    def snapshot(self, elements: Sequence[MemoryElement] = ()) -> dict[str, Any]:
        """导出当前状态"""
        return {
            "pages": len(self.pages),
            "layers": self.layer_names(),
            "lists": sorted(self.lists),
            "elements": [
                {
                    "name": e.name,
                    "page": e.page.offset if e.page is not None else None,
                    "center": e.get_bounds().center.as_tuple(),
                    "number": e.display_number,
                    "list": e.applied_list.name if e.applied_list else None,
                }
                for e in elements
            ],
            "paths": [
                {
                    "page": item.page.offset,
                    "layer": item.layer.name,
                    "points": [p.as_tuple() for p in item.anchors],
                    "smooth": all(pt.point_type == "smooth" for pt in item.points()),
                }
                for item in self.path_items
            ],
        }
