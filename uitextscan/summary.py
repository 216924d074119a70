"""複数ファイルの抽出結果の集計。結果列から毎回計算し直す純粋関数のみ。"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Tuple

from .fragment import CATEGORIES, ExtractedFragment, ParsedFileResult


@dataclass(frozen=True)
class Summary:
    total_files: int
    file_types: Mapping[str, int]
    total_texts: int
    text_types: Mapping[str, int]
    all_texts: Tuple[ExtractedFragment, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_files": self.total_files,
            "file_types": dict(self.file_types),
            "total_texts": self.total_texts,
            "text_types": dict(self.text_types),
            "all_texts": [f.to_dict() for f in self.all_texts],
        }


def build_summary(results: Iterable[ParsedFileResult]) -> Summary:
    results = list(results)
    file_types: Counter[str] = Counter()
    text_types: Dict[str, int] = {name: 0 for name in CATEGORIES}
    stamped = []
    for result in results:
        file_types[result.extension] += 1
        for category, items in result.extracted.items():
            text_types[category] = text_types.get(category, 0) + len(items)
            stamped.extend(
                f.with_file(result.file_name, result.file_path) for f in items if f.text
            )
    # 行 → 桁 の順で安定ソート
    stamped.sort(key=lambda f: (f.line_number, f.column_start))
    return Summary(
        total_files=len(results),
        file_types=dict(file_types),
        total_texts=sum(text_types.values()),
        text_types=text_types,
        all_texts=tuple(stamped),
    )


__all__ = ["Summary", "build_summary"]
