"""候補の周辺文脈だけを見て、自然言語でない文脈を判定する述語群。

どの判定も候補位置の前後の固定幅(100-300文字)のみを参照する。構文解析はしない。
"""
from __future__ import annotations
import re

IMPORT_LOOKBEHIND = 100
IMPORT_LOOKAHEAD = 50
CALL_LOOKBEHIND = 300
DIAGNOSTIC_LOOKBEHIND = 200
ATTRIBUTE_WINDOW = 200

_IMPORT_RES = [
    re.compile(r"require\s*\("),
    re.compile(r"import\s+.*\s+from\s+"),
    re.compile(r"export\s+.*\s+from\s+"),
]

# 関数呼び出しらしい '(' の直前: foo( / obj.method( / a.b.c( / arr[0](
_CALLEE_RE = re.compile(r"(\w+(?:\.\w+)*|\]\s*)$")
_CONTROL_KEYWORDS = frozenset({
    "if", "for", "while", "switch", "catch", "return", "typeof", "do", "else",
    "in", "of", "new", "await", "yield", "case", "void", "delete", "with",
})

_DIAGNOSTIC_RE = re.compile(r"console\.(log|error|warn|info|debug|trace)\s*\(\s*['\"`]*$")

_SCRIPT_OPEN_RE = re.compile(r"<script\b[^>]*>", re.IGNORECASE)
_SCRIPT_CLOSE_RE = re.compile(r"</script>", re.IGNORECASE)
_STYLE_OPEN_RE = re.compile(r"<style\b[^>]*>", re.IGNORECASE)
_STYLE_CLOSE_RE = re.compile(r"</style>", re.IGNORECASE)

_ATTR_NAME_RE = re.compile(r"([\w-]+)\s*$")
_TAG_RE = re.compile(r"<[^>]*>")
# 閉じていない開始タグ (<img alt= など) で終わる。比較演算子の "<" は含めない
_OPEN_TAG_TAIL_RE = re.compile(r"<[A-Za-z][\w.:-]*(?:\s[^<>]*)?$")
_KNOWN_ATTR_RE = re.compile(
    r"^(class|classname|id|style|src|href|type|name|role|aria-\w+|data-\w+|key|ref|"
    r"onclick|onchange|value|checked|disabled|readonly|placeholder|title|alt)$",
    re.IGNORECASE,
)

_SCRIPT_LIKE_RES = [
    re.compile(r"\w+\([^)]*\)"),  # func()
    re.compile(r"\w+\.\w+"),  # obj.prop
    re.compile(r"\w+:\s*['\"]"),  # key: 'value'
    re.compile(r"\$t\("),  # i18n
]
_DIRECTIVE_RE = re.compile(r":\w+\s*=")


def is_ignored_import(content: str, index: int, length: int) -> bool:
    window = content[max(0, index - IMPORT_LOOKBEHIND):index + length + IMPORT_LOOKAHEAD]
    return any(p.search(window) for p in _IMPORT_RES)


def _is_call_paren(prefix: str) -> bool:
    m = _CALLEE_RE.search(prefix.strip())
    if not m:
        return False
    callee = m.group(1).strip()
    if callee.endswith("]"):
        return True
    return callee.rsplit(".", 1)[-1] not in _CONTROL_KEYWORDS


def matching_paren(content: str, open_pos: int) -> int | None:
    depth = 1
    for i in range(open_pos + 1, len(content)):
        ch = content[i]
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return None


def is_inside_function_call(content: str, index: int) -> bool:
    search_start = max(0, index - CALL_LOOKBEHIND)
    before = content[search_start:index]
    # 近い '(' から順に調べる
    for i in range(len(before) - 1, -1, -1):
        if before[i] != "(" or not _is_call_paren(before[:i]):
            continue
        open_pos = search_start + i
        close_pos = matching_paren(content, open_pos)
        if close_pos is not None and open_pos < index < close_pos:
            return True
    return False


def is_in_diagnostic_call(content: str, index: int) -> bool:
    before = content[max(0, index - DIAGNOSTIC_LOOKBEHIND):index]
    return _DIAGNOSTIC_RE.search(before) is not None


def is_in_raw_text_region(content: str, index: int) -> bool:
    """index が <script> / <style> 要素の内側なら True（開始タグ数 > 終了タグ数）。"""
    prefix = content[:index + 1]
    if len(_SCRIPT_OPEN_RE.findall(prefix)) > len(_SCRIPT_CLOSE_RE.findall(prefix)):
        return True
    return len(_STYLE_OPEN_RE.findall(prefix)) > len(_STYLE_CLOSE_RE.findall(prefix))


def is_markup_attribute_value(content: str, index: int) -> bool:
    """index のクォートが name="value" / name='value' の値の開始位置かを判定する。"""
    ctx_start = max(0, index - ATTRIBUTE_WINDOW)
    ctx = content[ctx_start:min(len(content), index + ATTRIBUTE_WINDOW)]
    rel = index - ctx_start
    before = ctx[:rel]
    last_eq = before.rfind("=")
    if last_eq == -1:
        return False
    m = _ATTR_NAME_RE.search(before[:last_eq].strip())
    if not m:
        return False
    name = m.group(1).lower()
    quote = content[index:index + 1]
    if quote not in ("'", '"') or ctx.find(quote, rel + 1) == -1:
        return False
    if not _TAG_RE.search(ctx):
        return False
    # 開始タグの内側にいること
    if not _OPEN_TAG_TAIL_RE.search(before):
        return False
    return bool(
        _KNOWN_ATTR_RE.match(name)
        or re.match(r"^on[A-Z]", m.group(1))
        or name.startswith(("v-", ":"))
        or "-" in name
        or name.startswith("data")
    )


def looks_like_script(text: str) -> bool:
    if "=>" in text or "function" in text:
        return True
    if ":" in text and _DIRECTIVE_RE.search(text):
        return True
    return any(p.search(text) for p in _SCRIPT_LIKE_RES)


INTERPOLATION_BRACES = "braces"
INTERPOLATION_MUSTACHE = "mustache"


def has_interpolation(text: str, style: str | None) -> bool:
    if "{{" in text and "}}" in text:
        return True
    if style == INTERPOLATION_BRACES:
        return "{" in text or "}" in text
    return False


__all__ = [
    "matching_paren",
    "is_ignored_import",
    "is_inside_function_call",
    "is_in_diagnostic_call",
    "is_in_raw_text_region",
    "is_markup_attribute_value",
    "looks_like_script",
    "has_interpolation",
    "INTERPOLATION_BRACES",
    "INTERPOLATION_MUSTACHE",
]
