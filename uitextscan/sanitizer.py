"""走査前の前処理: コメント/正規表現リテラル/タグ/URL を同じ長さの空白や記号で塗りつぶす。

バッファの長さは変えないため、後段のオフセットは補正不要。

手順:
1. 作業用コピーで行頭の http(s):// と <...> を空白化
2. ブロックコメントと // 行コメントを行単位で空白化
3. /.../flags 形の候補を re でコンパイルできたものだけ "****" に置換
4. 最初と最後に置換できた範囲だけを元のバッファへ書き戻す

注意: 書き戻しは最初〜最後の範囲のみ。範囲外のコメント等は元のまま残る。
検証は Python の re で行うため、\p{L} や \cX など JS 固有の構文を含む正規表現は置換されずに残る。
"""
from __future__ import annotations
import logging
import re
from typing import List, Tuple

logger = logging.getLogger(__name__)

_URL_PREFIX_RE = re.compile(r"^https?://", re.MULTILINE)
_TAG_RE = re.compile(r"<[^>]*>")
_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/|[^\\]//.+")
_REGEX_CANDIDATE_RE = re.compile(r"/(.*)/+([gimuy]*)")
_REGEX_PARTS_RE = re.compile(r"^/(.*)/([gimuy]*)$", re.DOTALL)

_FLAG_MAP = {"i": re.IGNORECASE, "m": re.MULTILINE}


def _blank_keep_newlines(text: str, start: int, end: int) -> str:
    segment = re.sub(r"[^\n]", " ", text[start:end])
    return text[:start] + segment + text[end:]


def _compile_candidate(candidate: str) -> bool:
    m = _REGEX_PARTS_RE.match(candidate)
    if not m:
        return False
    body, flags = m.group(1), m.group(2)
    compiled_flags = 0
    for f in flags:
        compiled_flags |= _FLAG_MAP.get(f, 0)
    try:
        re.compile(body, compiled_flags)
    except re.error as e:
        logger.debug("regex-like span left unmasked: %s (%s)", candidate, e)
        return False
    return True


def mask_regex_literals(scratch: str) -> Tuple[str, List[Tuple[int, int]]]:
    """正規表現リテラルらしき範囲を "****" に置換し、置換した範囲の一覧を返す。"""
    masked: List[Tuple[int, int]] = []
    for m in _REGEX_CANDIDATE_RE.finditer(scratch):
        candidate = m.group(0).strip()
        if not _compile_candidate(candidate):
            continue
        start = m.start()
        end = start + len(candidate)
        placeholder = '"' + "*" * (len(candidate) - 2) + '"'
        scratch = scratch[:start] + placeholder + scratch[end:]
        masked.append((start, end))
    return scratch, masked


def sanitize(content: str) -> str:
    scratch = _URL_PREFIX_RE.sub(lambda m: " " * len(m.group(0)), content)
    scratch = _TAG_RE.sub(lambda m: " " * len(m.group(0)), scratch)

    for m in _COMMENT_RE.finditer(scratch):
        scratch = _blank_keep_newlines(scratch, m.start(), m.end())

    scratch, masked = mask_regex_literals(scratch)
    if not masked:
        return content
    start = masked[0][0]
    end = masked[-1][1]
    return content[:start] + scratch[start:end] + content[end:]


__all__ = ["sanitize", "mask_regex_literals"]
