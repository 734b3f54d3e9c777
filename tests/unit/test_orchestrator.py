"""
分页编排器单元测试
"""

import pytest

from conftest import (
    CARD_BOUNDS,
    CancelledSelector,
    LockedNumberingElement,
    NoAppendDocument,
    NoLinesDocument,
    RecordingSelector,
    TinyAppendDocument,
)
from snakeflow.host import MemoryDocument
from snakeflow.interfaces import ConfigurationError, NoElementsError, UnknownPatternError
from snakeflow.models import StepStatus
from snakeflow.pipeline import BatchOrchestrator, FixedPatternSelector, split_batches


@pytest.fixture
def orchestrator(document, runtime_config, catalog) -> BatchOrchestrator:
    return BatchOrchestrator(document, config=runtime_config, catalog=catalog)


class TestSplitBatches:
    """分批测试"""

    @pytest.mark.parametrize(
        "n, sizes",
        [(1, [1]), (12, [12]), (13, [12, 1]), (25, [12, 12, 1]), (36, [12, 12, 12])],
    )
    def test_batches_split(self, n, sizes):
        """测试按12个连续切分"""
        batches = split_batches(list(range(n)), 12)
        assert [len(b) for b in batches] == sizes
        assert [x for b in batches for x in b] == list(range(n))


class TestBatchOrchestrator:
    """整次运行测试"""

    def test_twenty_five_objects(self, orchestrator, document, make_elements):
        """测试25个对象：3页，批次[12,12,1]，自动追加页面"""
        elements = make_elements(25)
        summary = orchestrator.run(elements, [1, 2, 3], document.pages[0])

        assert summary.total_objects == 25
        assert summary.pages_used == 3
        assert summary.batch_sizes == [12, 12, 1]
        assert summary.pattern_names == ["UP-LOW1", "UP-LOW2", "UP-LOW3"]
        assert document.page_count() == 3
        assert all(e.page is document.pages[1] for e in elements[12:24])
        assert elements[24].page is document.pages[2]
        assert [p.page_number for p in summary.pages] == [1, 2, 3]

    def test_elements_centered_on_grid(self, orchestrator, document, make_elements):
        """测试元素中心落在格子中心"""
        elements = make_elements(12)
        summary = orchestrator.run(elements, [1], document.pages[0])

        centers = summary.pages[0].placement.centers
        pattern = orchestrator.catalog.get_pattern(1)
        for slot in range(12):
            center = elements[slot].get_bounds().center
            assert center.x == pytest.approx(centers[slot].x)
            assert center.y == pytest.approx(centers[slot].y)
        assert sorted(centers) == sorted(pattern.row_major())

    def test_per_page_lists(self, orchestrator, document, make_elements):
        """测试每页独立编号列表，编号各自从1开始"""
        elements = make_elements(13)
        orchestrator.run(elements, [1, 1], document.pages[0])

        assert sorted(document.lists) == ["SnakeList_Page_1", "SnakeList_Page_2"]
        assert elements[0].display_number == 1
        assert elements[12].display_number == 1
        assert elements[12].applied_list.name == "SnakeList_Page_2"

    def test_start_page_in_middle(self, runtime_config, catalog, make_elements):
        """测试从中间页开始：使用已有页面"""
        document = MemoryDocument(page_count=5)
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)
        elements = make_elements(13, page=document.pages[0])

        summary = orchestrator.run(elements, [1, 1], document.pages[2])

        assert summary.start_page_number == 3
        assert document.page_count() == 5
        assert [p.page_offset for p in summary.pages] == [2, 3]
        assert elements[0].page is document.pages[2]
        assert elements[12].page is document.pages[3]

    def test_pages_appended_after_last(self, runtime_config, catalog, make_elements):
        """测试目标页不存在时在末页后追加"""
        document = MemoryDocument(page_count=4)
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)
        elements = make_elements(25, page=document.pages[0])

        summary = orchestrator.run(elements, [1, 1, 1], document.pages[3])

        assert document.page_count() == 6
        assert [p.page_offset for p in summary.pages] == [3, 4, 5]

    def test_paths_on_background_layer(self, orchestrator, document, make_elements):
        """测试连线在BG图层，BG/BG PATH在最底层"""
        summary = orchestrator.run(make_elements(25), [1, 1, 1], document.pages[0])

        assert summary.layers == StepStatus.SUCCEEDED
        assert document.layer_names() == ["BG PATH", "BG", "Layer 1"]
        # 最后一页只有1个对象，不画线
        assert summary.path_count == 2
        assert summary.pages[2].path.status == StepStatus.SKIPPED
        assert all(item.layer.name == "BG" for item in document.path_items)

    def test_paths_smoothed_together(self, orchestrator, document, make_elements):
        """测试所有连线一起选中并转为平滑点"""
        summary = orchestrator.run(make_elements(24), [2, 5], document.pages[0])

        assert summary.curve_conversion == StepStatus.SUCCEEDED
        assert document.selection == document.path_items
        assert len(document.path_items) == 2
        for item in document.path_items:
            assert len(item.anchors) == 12
            assert all(pt.point_type == "smooth" for pt in item.points())

    def test_single_object(self, orchestrator, document, make_elements):
        """测试单个对象：编号1，无连线"""
        elements = make_elements(1)
        summary = orchestrator.run(elements, [7], document.pages[0])

        assert summary.pages_used == 1
        assert elements[0].display_number == 1
        assert document.path_items == []
        assert summary.curve_conversion == StepStatus.SKIPPED

    def test_progress_callback(self, document, runtime_config, catalog, make_elements):
        """测试进度回调"""
        events = []
        orchestrator = BatchOrchestrator(
            document,
            config=runtime_config,
            catalog=catalog,
            progress_cb=lambda stage, percent, message: events.append((stage, percent)),
        )
        orchestrator.run(make_elements(25), [1, 1, 1], document.pages[0])

        assert events[0] == ("VALIDATE", 0)
        assert events[-1] == ("DONE", 100)
        percents = [p for _, p in events]
        assert percents == sorted(percents)
        assert sum(1 for stage, _ in events if stage == "PAGES") == 3


class TestPatternSelection:
    """图案选择测试"""

    def test_selection_abort_no_mutation(self, orchestrator, document, make_elements):
        """测试取消选择：文档不做任何修改"""
        elements = make_elements(13)
        before = document.snapshot(elements)
        selector = CancelledSelector()

        summary = orchestrator.run(elements, selector, document.pages[0])

        assert summary.aborted
        assert summary.pages_used == 0
        assert selector.calls == 1
        assert document.snapshot(elements) == before
        assert document.layer_names() == ["Layer 1"]

    def test_selector_receives_names(self, orchestrator, document, make_elements, catalog):
        """测试选择器收到页数和图案名称"""
        selector = RecordingSelector([4, 5])
        summary = orchestrator.run(make_elements(13), selector, document.pages[0])

        assert selector.calls == [(2, catalog.names())]
        assert summary.pattern_names == ["UP-UP MID", "LOW MID – UP MID"]

    def test_many_pages_bypass_selector(self, orchestrator, document, make_elements):
        """测试超过6页不询问，全部使用图案1"""
        selector = CancelledSelector()
        summary = orchestrator.run(make_elements(73), selector, document.pages[0])

        assert selector.calls == 0
        assert not summary.aborted
        assert summary.pages_used == 7
        assert set(summary.pattern_names) == {"UP-LOW1"}

    def test_six_pages_still_ask(self, orchestrator, document, make_elements):
        """测试正好6页仍询问"""
        selector = RecordingSelector([3] * 6)
        orchestrator.run(make_elements(72), selector, document.pages[0])
        assert selector.calls[0][0] == 6

    def test_fixed_selector_repeats_last(self):
        """测试固定选择器不足时沿用最后一个"""
        assert FixedPatternSelector([2, 9]).select_patterns(4, []) == [2, 9, 9, 9]
        assert FixedPatternSelector(3).select_patterns(2, []) == [3, 3]
        assert FixedPatternSelector([]).select_patterns(2, []) is None


class TestValidation:
    """输入校验测试"""

    def test_no_elements(self, orchestrator, document):
        """测试没有元素"""
        with pytest.raises(NoElementsError):
            orchestrator.run([], [1], document.pages[0])

    def test_unknown_pattern_before_mutation(self, orchestrator, document, make_elements):
        """测试未知图案在任何修改前报错"""
        elements = make_elements(5)
        before = document.snapshot(elements)

        with pytest.raises(UnknownPatternError):
            orchestrator.run(elements, [11], document.pages[0])
        assert document.snapshot(elements) == before

    def test_pattern_count_mismatch(self, orchestrator, document, make_elements):
        """测试图案数与页数不一致"""
        with pytest.raises(ConfigurationError):
            orchestrator.run(make_elements(5), [1, 2], document.pages[0])

    def test_page_too_small(self, runtime_config, catalog, make_elements):
        """测试页面过小在修改前报错"""
        document = MemoryDocument(page_width=100, page_height=100)
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)

        with pytest.raises(ConfigurationError):
            orchestrator.run(make_elements(3, page=document.pages[0]), [1], document.pages[0])
        assert document.layer_names() == ["Layer 1"]

    def test_later_page_too_small_before_mutation(self, runtime_config, catalog, make_elements):
        """测试后续已存在页面过小：在任何修改前报错"""
        document = MemoryDocument(page_count=2)
        document.pages[1].width = 50
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)
        elements = make_elements(13, page=document.pages[0])
        before = document.snapshot(elements)

        with pytest.raises(ConfigurationError):
            orchestrator.run(elements, [1, 1], document.pages[0])
        assert document.snapshot(elements) == before


class TestDegradation:
    """降级隔离测试"""

    def test_numbering_degradation_isolated(self, orchestrator, document, make_elements):
        """测试单页编号降级不影响后续页"""
        elements = make_elements(24)
        elements[7] = LockedNumberingElement(CARD_BOUNDS, page=document.pages[0], paragraphs=["Locked"])

        summary = orchestrator.run(elements, [1, 1], document.pages[0])

        assert summary.pages[0].numbering.status == StepStatus.DEGRADED
        assert summary.pages[1].numbering.status == StepStatus.SUCCEEDED
        assert "编号降级:SnakeList_Page_1" in summary.flags
        assert elements[0].static_number == 1
        assert elements[13].applied_list.name == "SnakeList_Page_2"

    def test_path_failure_isolated(self, runtime_config, catalog, make_elements):
        """测试无法画线：排版与编号照常完成"""
        document = NoLinesDocument()
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)
        elements = make_elements(13, page=document.pages[0])

        summary = orchestrator.run(elements, [1, 1], document.pages[0])

        assert summary.pages_used == 2
        assert summary.pages[0].path.status == StepStatus.FAILED
        assert summary.pages[1].path.status == StepStatus.SKIPPED
        assert summary.path_count == 0
        assert "连线失败:第1页" in summary.flags
        assert elements[12].display_number == 1

    def test_page_append_failure_isolated(self, runtime_config, catalog, make_elements):
        """测试追加页失败：只跳过该批，已排版的页保留"""
        document = NoAppendDocument()
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)
        elements = make_elements(25, page=document.pages[0])

        summary = orchestrator.run(elements, [1, 1, 1], document.pages[0])

        assert summary.pages_used == 1
        assert summary.batch_sizes == [12]
        assert "页面不可用:第2批" in summary.flags
        assert "页面不可用:第3批" in summary.flags
        assert elements[0].display_number == 1
        assert summary.curve_conversion == StepStatus.SUCCEEDED

    def test_appended_page_too_small_isolated(self, runtime_config, catalog, make_elements):
        """测试追加的页面过小：跳过该批，后续批次照常"""
        document = TinyAppendDocument()
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)
        elements = make_elements(13, page=document.pages[0])

        summary = orchestrator.run(elements, [1, 1], document.pages[0])

        assert summary.pages_used == 1
        assert "页面不可用:第2批" in summary.flags
        assert elements[12].page is document.pages[0]


class TestObjectsPerPage:
    """每页对象数配置测试"""

    def test_fewer_objects_per_page(self, document, runtime_config, catalog, make_elements):
        """测试每页6个：批次[6, 6, 1]，空格保持空白"""
        runtime_config.grid.objects_per_page = 6
        orchestrator = BatchOrchestrator(document, config=runtime_config, catalog=catalog)

        summary = orchestrator.run(make_elements(13), [1, 2, 3], document.pages[0])

        assert summary.batch_sizes == [6, 6, 1]
        assert document.page_count() == 3
        assert len(summary.pages[0].placement.centers) == 6
