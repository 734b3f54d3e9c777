import argparse
import json

from snakeflow.config import RuntimeConfig
from snakeflow.host import MemoryDocument
from snakeflow.interfaces import SnakeFlowError
from snakeflow.logging_setup import setup_logging
from snakeflow.pipeline import BatchOrchestrator, FixedPatternSelector, format_summary


def _parse_page_size(text: str) -> tuple[float, float]:
    width, _, height = text.lower().partition("x")
    return float(width), float(height)


def _parse_patterns(text: str) -> list[int]:
    return [int(p) for p in text.split(",") if p.strip()]


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Arrange N cards on an in-memory document with snake patterns."
    )
    parser.add_argument("--count", type=int, default=25, help="元素数量（默认：25）")
    parser.add_argument(
        "--patterns",
        default="1",
        help="每页图案ID，逗号分隔；不足的页沿用最后一个（默认：1）",
    )
    parser.add_argument("--pages", type=int, default=1, help="文档已有页数（默认：1）")
    parser.add_argument("--start-page", type=int, default=1, help="起始页码，从1开始（默认：1）")
    parser.add_argument("--page-size", default="612x792", help="页面尺寸 WxH（默认：612x792）")
    parser.add_argument("--config", default="", help="可选：运行期YAML")
    parser.add_argument("--json", action="store_true", help="输出文档快照JSON")
    args = parser.parse_args()

    config = RuntimeConfig.from_yaml(args.config) if args.config else RuntimeConfig()
    setup_logging(config.logging)

    width, height = _parse_page_size(args.page_size)
    doc = MemoryDocument(page_count=args.pages, page_width=width, page_height=height)
    if not 1 <= args.start_page <= doc.page_count():
        print(f"起始页不存在: {args.start_page}")
        return 1

    start_page = doc.page_at(args.start_page - 1)
    elements = [
        doc.add_element(page=start_page, text=f"Card {i + 1}", name=f"card-{i + 1}")
        for i in range(args.count)
    ]

    orchestrator = BatchOrchestrator(doc, config=config)
    selector = FixedPatternSelector(_parse_patterns(args.patterns))
    try:
        summary = orchestrator.run(elements, selector, start_page)
    except SnakeFlowError as e:
        print(f"排版失败: {e}")
        return 1

    if args.json:
        print(json.dumps(
            {"summary": summary.model_dump(mode="json", exclude={"pages": {"__all__": {"path": {"paths"}}}}),
             "document": doc.snapshot(elements)},
            ensure_ascii=False,
            indent=2,
        ))
    else:
        print(format_summary(summary))
    return 0 if not summary.aborted else 2


if __name__ == "__main__":
    raise SystemExit(main())
