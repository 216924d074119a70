"""抽出結果のデータモデル。

- ExtractedFragment: 抽出された1つのテキスト片（位置情報付き、不変）
- ParsedFileResult: 1ファイル分の抽出結果
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Dict, Iterator, Mapping, Tuple

from .position import position_info

KIND_HTML_TEXT = "html_text"
KIND_STRING = "string"
KIND_ATTRIBUTE = "attribute"

CONTEXT_SCRIPT = "script"
CONTEXT_MARKUP = "markup"
CONTEXT_TEMPLATE = "template"

# カテゴリ名（ParsedFileResult.extracted のキー）
CATEGORY_STRINGS = "strings"
CATEGORY_HTML_TEXT = "html_text"
CATEGORY_ATTRIBUTES = "attributes"
CATEGORIES = (CATEGORY_HTML_TEXT, CATEGORY_ATTRIBUTES, CATEGORY_STRINGS)

_KIND_TO_CATEGORY = {
    KIND_STRING: CATEGORY_STRINGS,
    KIND_HTML_TEXT: CATEGORY_HTML_TEXT,
    KIND_ATTRIBUTE: CATEGORY_ATTRIBUTES,
}


def category_for(kind: str) -> str:
    return _KIND_TO_CATEGORY[kind]


@dataclass(frozen=True)
class ExtractedFragment:
    text: str
    kind: str
    context: str
    line_number: int
    column_start: int
    column_end: int
    absolute_start: int
    absolute_end: int
    original_column_start: int
    original_column_end: int
    original_absolute_start: int
    original_absolute_end: int
    original_match: str
    attribute: str | None = None
    file: str | None = None
    file_path: str | None = None

    @classmethod
    def build(
        cls,
        source: str,
        text: str,
        kind: str,
        context: str,
        start: int,
        end: int,
        original_start: int,
        original_end: int,
        attribute: str | None = None,
    ) -> "ExtractedFragment":
        """source 全体の座標で位置を計算してフラグメントを作る。"""
        pos = position_info(source, start, end)
        orig = position_info(source, original_start, original_end)
        return cls(
            text=text,
            kind=kind,
            context=context,
            line_number=pos.line_number,
            column_start=pos.column_start,
            column_end=pos.column_end,
            absolute_start=pos.absolute_start,
            absolute_end=pos.absolute_end,
            original_column_start=orig.column_start,
            original_column_end=orig.column_end,
            original_absolute_start=orig.absolute_start,
            original_absolute_end=orig.absolute_end,
            original_match=source[original_start:original_end],
            attribute=attribute,
        )

    def shifted(self, bias: int, source: str) -> "ExtractedFragment":
        """部分領域で得たフラグメントを外側バッファの座標へ移す。

        オフセットに bias を足し、行/桁は source 上で再計算する。元のインスタンスは変更しない。
        """
        start = self.absolute_start + bias
        end = self.absolute_end + bias
        orig_start = self.original_absolute_start + bias
        orig_end = self.original_absolute_end + bias
        pos = position_info(source, start, end)
        orig = position_info(source, orig_start, orig_end)
        return replace(
            self,
            line_number=pos.line_number,
            column_start=pos.column_start,
            column_end=pos.column_end,
            absolute_start=start,
            absolute_end=end,
            original_column_start=orig.column_start,
            original_column_end=orig.column_end,
            original_absolute_start=orig_start,
            original_absolute_end=orig_end,
        )

    def with_file(self, file: str | None, file_path: str | None) -> "ExtractedFragment":
        return replace(self, file=file, file_path=file_path)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "text": self.text,
            "type": self.kind,
            "context": self.context,
            "line_number": self.line_number,
            "column_start": self.column_start,
            "column_end": self.column_end,
            "absolute_start": self.absolute_start,
            "absolute_end": self.absolute_end,
            "original_column_start": self.original_column_start,
            "original_column_end": self.original_column_end,
            "original_absolute_start": self.original_absolute_start,
            "original_absolute_end": self.original_absolute_end,
            "original_match": self.original_match,
        }
        if self.attribute is not None:
            data["attribute"] = self.attribute
        if self.file is not None:
            data["file"] = self.file
        if self.file_path is not None:
            data["file_path"] = self.file_path
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractedFragment":
        return cls(
            text=data["text"],
            kind=data["type"],
            context=data["context"],
            line_number=int(data["line_number"]),
            column_start=int(data["column_start"]),
            column_end=int(data["column_end"]),
            absolute_start=int(data["absolute_start"]),
            absolute_end=int(data["absolute_end"]),
            original_column_start=int(data["original_column_start"]),
            original_column_end=int(data["original_column_end"]),
            original_absolute_start=int(data["original_absolute_start"]),
            original_absolute_end=int(data["original_absolute_end"]),
            original_match=data["original_match"],
            attribute=data.get("attribute"),
            file=data.get("file"),
            file_path=data.get("file_path"),
        )


@dataclass(frozen=True)
class ParsedFileResult:
    extension: str
    extracted: Mapping[str, Tuple[ExtractedFragment, ...]]
    timestamp: str
    file_path: str | None = None
    file_name: str | None = None

    def fragments(self) -> Iterator[ExtractedFragment]:
        for items in self.extracted.values():
            yield from items

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "file_name": self.file_name,
            "extension": self.extension,
            "extracted_text": {
                name: [f.to_dict() for f in items] for name, items in self.extracted.items()
            },
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParsedFileResult":
        extracted = {
            name: tuple(ExtractedFragment.from_dict(d) for d in items)
            for name, items in (data.get("extracted_text") or {}).items()
        }
        return cls(
            extension=data["extension"],
            extracted=extracted,
            timestamp=data["timestamp"],
            file_path=data.get("file_path"),
            file_name=data.get("file_name"),
        )


__all__ = [
    "ExtractedFragment",
    "ParsedFileResult",
    "category_for",
    "CATEGORIES",
    "CATEGORY_STRINGS",
    "CATEGORY_HTML_TEXT",
    "CATEGORY_ATTRIBUTES",
    "KIND_HTML_TEXT",
    "KIND_STRING",
    "KIND_ATTRIBUTE",
    "CONTEXT_SCRIPT",
    "CONTEXT_MARKUP",
    "CONTEXT_TEMPLATE",
]
