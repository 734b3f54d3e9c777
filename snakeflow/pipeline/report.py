"""
汇总文本 - 把 RunSummary 渲染为给操作者看的多行说明

编排器本身不输出任何界面内容，展示由调用方负责。
"""

from __future__ import annotations

from ..models import RunSummary, StepStatus


def format_summary(summary: RunSummary) -> str:
    """生成汇总文本"""
    if summary.aborted:
        return "Pattern selection cancelled - document unchanged."

    lines = [
        f"Arranged {summary.total_objects} objects across {summary.pages_used} page(s)",
        f"Starting from page {summary.start_page_number}",
        f"Connecting paths: {summary.path_count} (curve conversion: {summary.curve_conversion.value})",
    ]
    if summary.layers != StepStatus.SUCCEEDED:
        lines.append(f"Background layers: {summary.layers.value}")

    lines.append("")
    lines.append("Patterns used:")
    for page in summary.pages:
        lines.append(f"Page {page.page_number}: {page.pattern_name}")

    if summary.flags:
        lines.append("")
        lines.append("Warnings:")
        lines.extend(f"- {flag}" for flag in summary.flags)

    return "\n".join(lines)
