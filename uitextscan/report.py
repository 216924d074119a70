"""抽出結果の JSON / テキスト出力。

書き込みに失敗しても例外は送出せず、ログに残して False を返す。
"""
from __future__ import annotations
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence

from .fragment import ParsedFileResult
from .parser import SUPPORTED_EXTENSIONS
from .summary import build_summary

logger = logging.getLogger(__name__)


def build_json_report(results: Sequence[ParsedFileResult]) -> Dict[str, Any]:
    return {
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "total_files": len(results),
            "supported_extensions": list(SUPPORTED_EXTENSIONS),
        },
        "summary": build_summary(results).to_dict(),
        "detailedResults": [r.to_dict() for r in results],
    }


def render_text_report(results: Iterable[ParsedFileResult]) -> str:
    summary = build_summary(results)
    lines: List[str] = [
        "Document Parser Results",
        "======================",
        "",
        f"Total Files Processed: {summary.total_files}",
        f"Total Meaningful Texts Found: {summary.total_texts}",
        "",
        "File Types:",
    ]
    lines += [f"  {ext}: {count} files" for ext, count in summary.file_types.items()]
    lines += ["", "Text Types:"]
    lines += [f"  {name}: {count} items" for name, count in summary.text_types.items()]
    lines += ["", "", "All Meaningful Texts with Position Info:", "========================================", ""]
    for n, item in enumerate(summary.all_texts, start=1):
        line = f"{n}. [{item.kind}] {item.file}"
        if item.line_number:
            line += f" (Line: {item.line_number}, Pos: {item.column_start}-{item.column_end})"
        if item.attribute:
            line += f" [{item.attribute}]"
        line += f': "{item.text}"'
        if item.original_match and item.original_match != item.text:
            line += f" | Original: {item.original_match}"
        lines.append(line)
    return "\n".join(lines) + "\n"


def _write(output_path: str | Path, content: str) -> bool:
    p = Path(output_path)
    try:
        if not p.parent.exists():
            p.parent.mkdir(parents=True, exist_ok=True)
            logger.info("Created directory: %s", p.parent)
        p.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error("Error writing to file %s: %s", p, e)
        return False
    logger.info("Results exported to: %s", p)
    return True


def export_json(results: Sequence[ParsedFileResult], output_path: str | Path) -> bool:
    data = build_json_report(results)
    return _write(output_path, json.dumps(data, ensure_ascii=False, indent=2))


def export_text(results: Sequence[ParsedFileResult], output_path: str | Path) -> bool:
    return _write(output_path, render_text_report(results))


__all__ = ["build_json_report", "render_text_report", "export_json", "export_text"]
