"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(ctx, make_elements):
        elements = make_elements(12)
"""

from __future__ import annotations

from typing import Callable, Sequence

import pytest

from snakeflow.config import CurveConfig, RuntimeConfig
from snakeflow.host import MemoryDocument, MemoryElement, MemoryPathPoint
from snakeflow.interfaces import HostError, IPage, IPatternSelector
from snakeflow.layout import GridGeometry, PatternCatalog
from snakeflow.models import Bounds, DocumentContext, PageBatch, Point

# 100×60 的卡片，初始位于页面左上角附近
CARD_BOUNDS = Bounds(top=10, left=20, bottom=70, right=120)


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture(scope="session")
def catalog() -> PatternCatalog:
    """默认图案目录（会话级别缓存）"""
    return PatternCatalog.load()


@pytest.fixture
def runtime_config() -> RuntimeConfig:
    """运行期配置（测试中不等待选中生效）"""
    return RuntimeConfig(curve=CurveConfig(settle_delay_ms=0))


# ============================================================================
# 文档 Fixtures
# ============================================================================

@pytest.fixture
def document() -> MemoryDocument:
    """单页 Letter 文档"""
    return MemoryDocument()


@pytest.fixture
def ctx(document: MemoryDocument, runtime_config: RuntimeConfig, catalog: PatternCatalog) -> DocumentContext:
    """文档上下文"""
    return DocumentContext(document=document, config=runtime_config, catalog=catalog)


@pytest.fixture
def geometry(document: MemoryDocument, runtime_config: RuntimeConfig) -> GridGeometry:
    """首页网格几何"""
    grid = runtime_config.grid
    return GridGeometry.from_page(document.pages[0].bounds, grid.margin, grid.gap)


@pytest.fixture
def make_elements(document: MemoryDocument) -> Callable[..., list[MemoryElement]]:
    """元素工厂：make_elements(n, numbered=True, cls=MemoryElement)"""

    def _make(
        n: int,
        numbered: bool = True,
        cls: type[MemoryElement] = MemoryElement,
        page: IPage | None = None,
    ) -> list[MemoryElement]:
        page = page or document.pages[0]
        elements = []
        for i in range(n):
            elements.append(
                cls(
                    CARD_BOUNDS,
                    page=page,
                    paragraphs=[f"Card {i}"] if numbered else None,
                    name=f"card-{i}",
                )
            )
        return elements

    return _make


@pytest.fixture
def make_batch(catalog: PatternCatalog, document: MemoryDocument) -> Callable[..., PageBatch]:
    """批次工厂：make_batch(elements, pattern_id=1, index=0)"""

    def _make(elements: Sequence[MemoryElement], pattern_id: int = 1, index: int = 0) -> PageBatch:
        return PageBatch(
            index=index,
            elements=list(elements),
            pattern=catalog.get_pattern(pattern_id),
            page=document.pages[0],
        )

    return _make


# ============================================================================
# 宿主失败替身
# ============================================================================

class NoMoveElement(MemoryElement):
    """不支持平移，只能改写边界"""

    def move_to(self, top_left: Point) -> None:
        raise HostError("move not supported")


class StuckElement(MemoryElement):
    """无法定位"""

    def move_to(self, top_left: Point) -> None:
        raise HostError("move not supported")

    def set_bounds(self, bounds) -> None:
        raise HostError("bounds locked")


class LockedNumberingElement(MemoryElement):
    """编号赋值失败"""

    def set_numbering_list(self, numbering_list, start_number: int) -> None:
        raise HostError("numbering locked")


class SegmentsOnlyDocument(MemoryDocument):
    """只能画两点线段"""

    def create_polyline(self, page, points):
        if len(points) > 2:
            raise HostError("entire path not supported")
        return super().create_polyline(page, points)


class NoLinesDocument(MemoryDocument):
    """无法画线"""

    def create_polyline(self, page, points):
        raise HostError("graphic lines unavailable")


class HandleOnlyPoint(MemoryPathPoint):
    """不支持直接设置点类型"""

    def set_smooth(self) -> None:
        raise HostError("point type unavailable")


class HandleOnlyDocument(MemoryDocument):
    """折线锚点只能改方向手柄"""

    def create_polyline(self, page, points):
        item = super().create_polyline(page, points)
        item._points = [HandleOnlyPoint(p) for p in points]
        return item


class NoAppendDocument(MemoryDocument):
    """无法追加页面"""

    def append_page_after(self, page):
        raise HostError("pages locked")


class TinyAppendDocument(MemoryDocument):
    """追加的页面尺寸过小"""

    def append_page_after(self, page):
        new_page = super().append_page_after(page)
        new_page.width = new_page.height = 50
        return new_page


class NoListDocument(MemoryDocument):
    """无法创建编号列表"""

    def get_or_create_list(self, name: str):
        raise HostError("lists locked")


class NoLayersDocument(MemoryDocument):
    """无法创建命名图层"""

    def get_or_create_layer(self, name: str):
        raise HostError("layers locked")


# ============================================================================
# 图案选择替身
# ============================================================================

class CancelledSelector(IPatternSelector):
    """总是取消"""

    def __init__(self):
        self.calls = 0

    def select_patterns(self, total_pages: int, pattern_names: list[str]) -> list[int] | None:
        self.calls += 1
        return None


class RecordingSelector(IPatternSelector):
    """记录调用并返回固定图案"""

    def __init__(self, pattern_ids: list[int]):
        self.pattern_ids = pattern_ids
        self.calls: list[tuple[int, list[str]]] = []

    def select_patterns(self, total_pages: int, pattern_names: list[str]) -> list[int] | None:
        self.calls.append((total_pages, pattern_names))
        return self.pattern_ids
