"""スクリプト中の文字列リテラル ("...", '...', `...`) を位置付きで抽出する。

制限:
- 3種類のクォートを独立に走査して結果を連結するため、"Don't" のように他種のクォートを
  含むリテラルでは重なった候補が出ることがある。
- 正規表現の文字クラス内に置かれたバッククォートは除外する（前後の文脈で簡易判定）。
"""
from __future__ import annotations
from dataclasses import dataclass
import re
from typing import Iterable, List, Tuple

_DOUBLE_RE = re.compile(r'"(?:[^"\\]|\\.)*"')
_SINGLE_RE = re.compile(r"'(?:[^'\\]|\\.)*'")
# テンプレートリテラルは改行をそのまま含められる
_TEMPLATE_RE = re.compile(r"`(?:[^`\\]|\\.|[\r\n])*`")

_OPEN_CLASS_BEFORE_RE = re.compile(r"\[[^\]]*$")
_CLOSE_CLASS_AFTER_RE = re.compile(r"^[^\]]*\]")


@dataclass(frozen=True)
class LiteralMatch:
    start: int
    end: int
    raw: str

    @property
    def body(self) -> str:
        return self.raw[1:-1]


def _in_regex_char_class(content: str, start: int, end: int) -> bool:
    before = content[max(0, start - 100):start]
    after = content[end:end + 20]
    return bool(_OPEN_CLASS_BEFORE_RE.search(before) and _CLOSE_CLASS_AFTER_RE.search(after))


def _contained(start: int, end: int, ranges: Iterable[Tuple[int, int]]) -> bool:
    return any(start >= r_start and end <= r_end for r_start, r_end in ranges)


def scan_literals(content: str, exclude: Iterable[Tuple[int, int]] = ()) -> List[LiteralMatch]:
    ranges = list(exclude)
    found: List[LiteralMatch] = []
    for pattern in (_DOUBLE_RE, _SINGLE_RE, _TEMPLATE_RE):
        for m in pattern.finditer(content):
            if pattern is _TEMPLATE_RE and _in_regex_char_class(content, m.start(), m.end()):
                continue
            if ranges and _contained(m.start(), m.end(), ranges):
                continue
            found.append(LiteralMatch(m.start(), m.end(), m.group(0)))
    return found


__all__ = ["LiteralMatch", "scan_literals"]
