"""抽出したテキスト片をプレースホルダ文字列で置き換える。

- 後ろ(absolute_start の大きい順)から置換するので、未処理の範囲のオフセットはずれない。
- 既定の置換文字列は元テキストと同じ長さのダミー文(lorem ipsum)。
- 範囲の重なりは呼び出し側の前提条件(検出はしない)。
"""
from __future__ import annotations
from dataclasses import dataclass
import random
from typing import Callable, Iterable, List, Optional

from .fragment import ExtractedFragment

LOREM_WORDS = (
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit",
    "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore", "et", "dolore",
    "magna", "aliqua", "enim", "ad", "minim", "veniam", "quis", "nostrud",
    "exercitation", "ullamco", "laboris", "nisi", "aliquip", "ex", "ea", "commodo",
    "consequat", "duis", "aute", "irure", "in", "reprehenderit", "voluptate",
    "velit", "esse", "cillum", "fugiat", "nulla", "pariatur", "excepteur", "sint",
    "occaecat", "cupidatat", "non", "proident", "sunt", "culpa", "qui", "officia",
    "deserunt", "mollit", "anim", "id", "est", "laborum",
)

Substitute = Callable[[ExtractedFragment, str], str]


@dataclass(frozen=True)
class ReplacementEdit:
    start: int
    end: int
    text: str


def generate_filler(length: int, rng: Optional[random.Random] = None) -> str:
    """ちょうど length 文字のダミー文を返す。"""
    if length <= 0:
        return ""
    rng = rng or random.Random()
    result = ""
    while len(result) < length:
        word = rng.choice(LOREM_WORDS)
        result = word.capitalize() if not result else f"{result} {word}"
        if len(result) > length:
            # 長すぎたら切り詰めて句点で終える
            return result[:length - 1] + "."
    return result


def drop_overlaps(fragments: Iterable[ExtractedFragment]) -> List[ExtractedFragment]:
    """開始位置順に見て、直前に採用した範囲と重なるものを捨てる。"""
    kept: List[ExtractedFragment] = []
    cur = 0
    for f in sorted(fragments, key=lambda x: (x.absolute_start, x.absolute_end)):
        if f.absolute_start < cur:
            continue  # overlap skip
        kept.append(f)
        cur = f.absolute_end
    return kept


def plan_edits(
    source: str,
    fragments: Iterable[ExtractedFragment],
    substitute: Substitute | None = None,
) -> List[ReplacementEdit]:
    edits: List[ReplacementEdit] = []
    for f in sorted(fragments, key=lambda x: x.absolute_start, reverse=True):
        original = source[f.absolute_start:f.absolute_end]
        if not original:
            continue
        text = substitute(f, original) if substitute else generate_filler(len(original))
        edits.append(ReplacementEdit(f.absolute_start, f.absolute_end, text))
    return edits


def apply_edits(source: str, edits: Iterable[ReplacementEdit]) -> str:
    result = source
    for e in sorted(edits, key=lambda x: x.start, reverse=True):
        result = result[:e.start] + e.text + result[e.end:]
    return result


def replace_fragments(
    source: str,
    fragments: Iterable[ExtractedFragment],
    substitute: Substitute | None = None,
) -> str:
    return apply_edits(source, plan_edits(source, fragments, substitute))


__all__ = [
    "ReplacementEdit",
    "generate_filler",
    "drop_overlaps",
    "plan_edits",
    "apply_edits",
    "replace_fragments",
    "LOREM_WORDS",
]
