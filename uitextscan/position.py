from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PositionInfo:
    line_number: int
    column_start: int
    column_end: int
    absolute_start: int
    absolute_end: int


def position_info(content: str, start: int, end: int) -> PositionInfo:
    """オフセット範囲を 1始まりの行番号 / 0始まりの桁に変換する。

    column_end は複数行にまたがる場合も column_start + 長さ (1行に投影した仮想的な桁)。
    """
    line = content.count("\n", 0, start) + 1
    last_nl = content.rfind("\n", 0, start)
    column_start = start - (last_nl + 1)
    return PositionInfo(
        line_number=line,
        column_start=column_start,
        column_end=column_start + (end - start),
        absolute_start=start,
        absolute_end=end,
    )


__all__ = ["PositionInfo", "position_info"]
