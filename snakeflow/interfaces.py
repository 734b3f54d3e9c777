"""
模块接口契约 - 定义宿主文档模型的抽象接口

设计原则：
1. 排版核心只通过接口访问宿主文档，不直接依赖具体实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换（可逐项模拟宿主失败）

宿主实现在操作受限时应抛出 HostError，核心按错误分类就地降级。

使用方式：
    from snakeflow.interfaces import IDocument

    class MyDocument(IDocument):
        def page_at(self, offset: int) -> IPage:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from .models import Bounds, PathStyle, Point


# ============================================================================
# 宿主对象句柄
# ============================================================================

class ILayer(ABC):
    """图层句柄"""

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    def is_valid(self) -> bool:
        return True


class IPage(ABC):
    """页面句柄"""

    @property
    @abstractmethod
    def offset(self) -> int:
        """文档顺序中的页偏移（从0开始）"""
        ...

    @property
    @abstractmethod
    def bounds(self) -> Bounds:
        """页面边界 (top, left, bottom, right)"""
        ...


class INumberingList(ABC):
    """编号列表句柄"""

    @property
    @abstractmethod
    def name(self) -> str:
        ...


class IElement(ABC):
    """
    排版元素句柄

    编号是可选能力：has_numbering_capability() 为 False 的元素
    不会调用任何编号相关方法。
    """

    @abstractmethod
    def get_bounds(self) -> Bounds:
        """当前边界框"""
        ...

    @abstractmethod
    def set_bounds(self, bounds: Bounds) -> None:
        """直接改写边界框"""
        ...

    @abstractmethod
    def move_to(self, top_left: Point) -> None:
        """
        整体平移到指定左上角（保持宽高）

        Raises:
            HostError: 宿主不支持平移
        """
        ...

    @property
    @abstractmethod
    def page(self) -> IPage | None:
        """当前所在页面"""
        ...

    @abstractmethod
    def move_to_page(self, page: IPage) -> None:
        """迁移到指定页面"""
        ...

    def has_numbering_capability(self) -> bool:
        return False

    def get_parent_text_container(self) -> object | None:
        """承载编号段落的文本容器（无编号能力时为None）"""
        return None

    @property
    def applied_list(self) -> INumberingList | None:
        """当前应用的编号列表"""
        return None

    def set_numbering_list(self, numbering_list: INumberingList, start_number: int) -> None:
        """应用编号列表及起始编号"""
        raise HostError("元素不支持编号")

    def clear_numbering(self) -> None:
        """清除编号（列表置空，起始编号重置为1）"""
        raise HostError("元素不支持编号")

    def convert_numbering_to_static_text(self) -> None:
        """将当前编号固化为静态文本"""
        raise HostError("元素不支持编号")


class IPathPoint(ABC):
    """路径锚点"""

    @property
    @abstractmethod
    def anchor(self) -> Point:
        ...

    @abstractmethod
    def set_smooth(self) -> None:
        """
        直接设为平滑点

        Raises:
            HostError: 宿主不支持点类型赋值
        """
        ...

    @abstractmethod
    def set_direction_handles(self, left: Point, right: Point) -> None:
        """设置左右方向手柄"""
        ...


class IPathItem(ABC):
    """折线句柄"""

    @property
    def is_valid(self) -> bool:
        return True

    @abstractmethod
    def points(self) -> list[IPathPoint]:
        ...

    @abstractmethod
    def apply_style(self, style: PathStyle) -> None:
        ...

    @abstractmethod
    def move_to_layer(self, layer: ILayer) -> None:
        ...


# ============================================================================
# 宿主文档接口
# ============================================================================

class IDocument(ABC):
    """宿主文档接口 - 图层/页面/编号列表/折线"""

    # --- 图层 ---

    @abstractmethod
    def get_or_create_layer(self, name: str) -> ILayer:
        """获取或创建命名图层"""
        ...

    @abstractmethod
    def default_layer(self) -> ILayer:
        """默认图层（命名图层不可用时使用）"""
        ...

    @abstractmethod
    def layers(self) -> list[ILayer]:
        """所有图层，自底向上"""
        ...

    @abstractmethod
    def position_layers(self, order: Sequence[ILayer]) -> None:
        """
        一次性重排图层

        Args:
            order: 自底向上的图层顺序，未列出的图层保持相对顺序置于其上
        """
        ...

    # --- 页面 ---

    @abstractmethod
    def page_count(self) -> int:
        ...

    @abstractmethod
    def page_at(self, offset: int) -> IPage:
        ...

    @abstractmethod
    def append_page_after(self, page: IPage) -> IPage:
        """在指定页之后追加新页"""
        ...

    # --- 编号列表 ---

    @abstractmethod
    def get_or_create_list(self, name: str) -> INumberingList:
        ...

    # --- 折线 ---

    @abstractmethod
    def create_polyline(self, page: IPage, points: Sequence[Point]) -> IPathItem:
        """
        一次调用创建整条折线

        Raises:
            HostError: 宿主无法创建
        """
        ...

    @abstractmethod
    def select(self, items: Sequence[IPathItem]) -> None:
        """选中一组折线（点类型转换前需要）"""
        ...


# ============================================================================
# 图案选择接口
# ============================================================================

class IPatternSelector(ABC):
    """图案选择接口（对话框等）"""

    @abstractmethod
    def select_patterns(self, total_pages: int, pattern_names: list[str]) -> list[int] | None:
        """
        为每页选择图案

        Args:
            total_pages: 页数
            pattern_names: 图案名称（按图案ID升序）

        Returns:
            每页一个图案ID；取消时返回None
        """
        ...


# ============================================================================
# 异常定义
# ============================================================================

class SnakeFlowError(Exception):
    """基础异常"""
    pass


class ConfigurationError(SnakeFlowError):
    """配置错误（图案表校验失败等，致命）"""
    pass


class UnknownPatternError(ConfigurationError):
    """未知图案ID"""
    pass


class NoElementsError(SnakeFlowError):
    """没有可排版的元素"""
    pass


class SelectionAbort(SnakeFlowError):
    """图案选择被取消"""
    pass


class HostError(SnakeFlowError):
    """宿主文档操作失败"""
    pass
