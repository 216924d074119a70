"""方言(ファイル種別)ごとの抽出パイプライン。

- script    (.js/.ts)   : 文字列リテラル → 文脈ガード → 判定 → 位置計算
- component (.jsx/.tsx) : return (...) 内をマークアップとして抽出し、残りをスクリプトとして抽出
- template  (.vue)      : 最初の <template> と最初の <script> をそれぞれ抽出
- markup    (.html)     : 全体をマークアップとして抽出し、各 <script> をスクリプトとして抽出

各関数は (content, bias, source) を受け取り、content を走査した結果を source 全体の
座標 (content の先頭が source 上の bias) で返す。
"""
from __future__ import annotations
import re
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from .classifier import MIN_TEXT_LENGTH, is_code_fragment, is_non_textual
from .fragment import (
    CATEGORIES,
    CONTEXT_MARKUP,
    CONTEXT_SCRIPT,
    CONTEXT_TEMPLATE,
    KIND_ATTRIBUTE,
    KIND_HTML_TEXT,
    KIND_STRING,
    ExtractedFragment,
    category_for,
)
from .guards import (
    INTERPOLATION_BRACES,
    INTERPOLATION_MUSTACHE,
    has_interpolation,
    is_ignored_import,
    is_in_diagnostic_call,
    is_in_raw_text_region,
    is_inside_function_call,
    is_markup_attribute_value,
    looks_like_script,
    matching_paren,
)
from .literals import scan_literals

# 自然言語を含みうる属性
NATURAL_LANGUAGE_ATTRIBUTES: Tuple[str, ...] = (
    "placeholder",
    "title",
    "alt",
    "aria-label",
    "label",
    "value",
    "aria-description",
    "aria-labelledby",
    "data-tooltip",
    "data-title",
    "data-description",
    "data-placeholder",
    "data-label",
)

_ATTRIBUTE_RES = [
    re.compile(r"(:|^|\s)(" + re.escape(name) + r")\s*=\s*[\"']([^\"']+)[\"']", re.IGNORECASE)
    for name in NATURAL_LANGUAGE_ATTRIBUTES
]
_INNER_TEXT_RE = re.compile(r">([^<]*?)<", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+")

_RETURN_OPEN_RE = re.compile(r"\breturn\s*\(")
_TEMPLATE_BLOCK_RE = re.compile(r"<template[^>]*>([\s\S]*?)</template>", re.IGNORECASE)
_SCRIPT_BLOCK_RE = re.compile(r"<script[^>]*>([\s\S]*?)</script>", re.IGNORECASE)

Range = Tuple[int, int]


def _clean(text: str) -> str:
    # 最初の改行のみ除去してから前後の空白を落とす
    return text.replace("\n", "", 1).strip()


def _rehome(fragments: List[ExtractedFragment], bias: int, source: str | None) -> List[ExtractedFragment]:
    if source is None:
        if bias:
            raise ValueError("source is required when bias is non-zero")
        return fragments
    return [f.shifted(bias, source) for f in fragments]


def extract_script(
    content: str,
    bias: int = 0,
    source: str | None = None,
    exclude: Iterable[Range] = (),
    skip_attribute_values: bool = False,
) -> List[ExtractedFragment]:
    fragments: List[ExtractedFragment] = []
    for lit in scan_literals(content, exclude=exclude):
        if is_ignored_import(content, lit.start, len(lit.raw)):
            continue
        body = lit.body
        if is_code_fragment(body):
            continue
        if is_inside_function_call(content, lit.start) or is_in_diagnostic_call(content, lit.start):
            continue
        if skip_attribute_values and is_markup_attribute_value(content, lit.start):
            continue
        if len(body.strip()) < MIN_TEXT_LENGTH or is_non_textual(body, is_script=True):
            continue
        fragments.append(ExtractedFragment.build(
            content,
            text=_clean(body),
            kind=KIND_STRING,
            context=CONTEXT_SCRIPT,
            start=lit.start + 1,
            end=lit.end - 1,
            original_start=lit.start,
            original_end=lit.end,
        ))
    return _rehome(fragments, bias, source)


def _extract_inner_text(content: str, context: str, interpolation: str | None) -> List[ExtractedFragment]:
    fragments: List[ExtractedFragment] = []
    for m in _INNER_TEXT_RE.finditer(content):
        inner = m.group(1)
        trimmed = inner.strip()
        text = _WHITESPACE_RE.sub(" ", trimmed)
        if len(text) < MIN_TEXT_LENGTH or is_non_textual(text):
            continue
        if is_in_raw_text_region(content, m.start()):
            continue
        if has_interpolation(text, interpolation) or looks_like_script(text):
            continue
        start = m.start(1) + inner.find(trimmed)
        fragments.append(ExtractedFragment.build(
            content,
            text=_clean(text),
            kind=KIND_HTML_TEXT,
            context=context,
            start=start,
            end=start + len(trimmed),
            original_start=m.start(),
            original_end=m.end(),
        ))
    return fragments


def _extract_attributes(content: str, context: str, interpolation: str | None) -> List[ExtractedFragment]:
    fragments: List[ExtractedFragment] = []
    for pattern in _ATTRIBUTE_RES:
        for m in pattern.finditer(content):
            if m.group(1) == ":":
                continue  # :title="..." などの動的バインディング
            value = m.group(3).strip()
            if len(value) < MIN_TEXT_LENGTH or has_interpolation(value, interpolation):
                continue
            if is_non_textual(value, is_attribute=True):
                continue
            fragments.append(ExtractedFragment.build(
                content,
                text=_clean(value),
                kind=KIND_ATTRIBUTE,
                context=context,
                start=m.start(3),
                end=m.end(3),
                original_start=m.start(2),
                original_end=m.end(),
                attribute=m.group(2),
            ))
    return fragments


def extract_markup(
    content: str,
    bias: int = 0,
    source: str | None = None,
    context: str = CONTEXT_MARKUP,
    interpolation: str | None = None,
) -> List[ExtractedFragment]:
    """マークアップ中のテキストノードと自然言語属性を抽出する。

    interpolation: "braces" (JSXの {...}) / "mustache" ({{...}}) / None。
    {{ }} はどの方言でも除外する。
    """
    fragments = _extract_inner_text(content, context, interpolation)
    fragments.extend(_extract_attributes(content, context, interpolation))
    return _rehome(fragments, bias, source)


def find_markup_regions(content: str) -> List[Range]:
    """トップレベルの return ( ... ) の中身(前後の空白を除く)の範囲を返す。"""
    regions: List[Range] = []
    pos = 0
    while True:
        m = _RETURN_OPEN_RE.search(content, pos)
        if not m:
            break
        open_pos = m.end() - 1
        close_pos = matching_paren(content, open_pos)
        if close_pos is None:
            break
        inner = content[open_pos + 1:close_pos]
        stripped = inner.strip()
        if stripped:
            start = open_pos + 1 + (len(inner) - len(inner.lstrip()))
            regions.append((start, start + len(stripped)))
        pos = close_pos + 1
    return regions


def extract_component(content: str, bias: int = 0, source: str | None = None) -> List[ExtractedFragment]:
    fragments: List[ExtractedFragment] = []
    regions = find_markup_regions(content)
    for start, end in regions:
        fragments.extend(extract_markup(
            content[start:end],
            bias=start,
            source=content,
            context=CONTEXT_MARKUP,
            interpolation=INTERPOLATION_BRACES,
        ))
    # マークアップ領域に完全に含まれるリテラルは二重抽出しない
    fragments.extend(extract_script(content, exclude=regions, skip_attribute_values=True))
    return _rehome(fragments, bias, source)


def extract_template(content: str, bias: int = 0, source: str | None = None) -> List[ExtractedFragment]:
    fragments: List[ExtractedFragment] = []
    m = _TEMPLATE_BLOCK_RE.search(content)
    if m:
        fragments.extend(extract_markup(
            m.group(1),
            bias=m.start(1),
            source=content,
            context=CONTEXT_TEMPLATE,
            interpolation=INTERPOLATION_MUSTACHE,
        ))
    m = _SCRIPT_BLOCK_RE.search(content)
    if m:
        fragments.extend(extract_script(
            m.group(1), bias=m.start(1), source=content, skip_attribute_values=True,
        ))
    return _rehome(fragments, bias, source)


def extract_html(content: str, bias: int = 0, source: str | None = None) -> List[ExtractedFragment]:
    fragments = extract_markup(content, context=CONTEXT_MARKUP)
    for m in _SCRIPT_BLOCK_RE.finditer(content):
        fragments.extend(extract_script(
            m.group(1), bias=m.start(1), source=content, skip_attribute_values=True,
        ))
    return _rehome(fragments, bias, source)


EXTRACTORS: Dict[str, Callable[[str], List[ExtractedFragment]]] = {
    ".js": extract_script,
    ".ts": extract_script,
    ".jsx": extract_component,
    ".tsx": extract_component,
    ".vue": extract_template,
    ".html": extract_html,
}


def group_by_category(fragments: Sequence[ExtractedFragment]) -> Dict[str, List[ExtractedFragment]]:
    grouped: Dict[str, List[ExtractedFragment]] = {name: [] for name in CATEGORIES}
    for f in fragments:
        grouped[category_for(f.kind)].append(f)
    return grouped


def extract_by_extension(content: str, extension: str) -> Dict[str, List[ExtractedFragment]]:
    extractor = EXTRACTORS.get(extension.lower())
    if extractor is None:
        return {name: [] for name in CATEGORIES}
    return group_by_category(extractor(content))


__all__ = [
    "NATURAL_LANGUAGE_ATTRIBUTES",
    "EXTRACTORS",
    "extract_script",
    "extract_markup",
    "extract_component",
    "extract_template",
    "extract_html",
    "find_markup_regions",
    "group_by_category",
    "extract_by_extension",
]
