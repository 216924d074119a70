"""自然言語テキストか、コード/技術的トークンかを判定するルール表。

各ルールは (rule_id, pattern, scope) を持ち、いずれか1つでも一致すれば「非テキスト」とみなす。
scope:
- always        : 常に適用
- non_attribute : 属性値の判定時は適用しない（ハイフン入りの語句を許容するため）
- script        : スクリプト文脈でのみ適用

文字数の下限(MIN_TEXT_LENGTH)は抽出側で適用する。
"""
from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Iterable, List, Pattern

SCOPE_ALWAYS = "always"
SCOPE_NON_ATTRIBUTE = "non_attribute"
SCOPE_SCRIPT = "script"
SCOPES = (SCOPE_ALWAYS, SCOPE_NON_ATTRIBUTE, SCOPE_SCRIPT)

MIN_TEXT_LENGTH = 3


@dataclass(frozen=True)
class ClassifierRule:
    rule_id: str
    pattern: Pattern[str]
    scope: str = SCOPE_ALWAYS
    description: str = ""

    def applies(self, is_attribute: bool, is_script: bool) -> bool:
        if self.scope == SCOPE_NON_ATTRIBUTE:
            return not is_attribute
        if self.scope == SCOPE_SCRIPT:
            return is_script
        return True

    def matches(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _rules() -> List[ClassifierRule]:
    raw: list[tuple[str, str, str, int, str]] = [
        # マークアップ/URL/パス
        ("HTML_ENTITY", r"^&[a-zA-Z]+;$", SCOPE_ALWAYS, 0, "&copy; などの実体参照"),
        ("URL", r"^https?://", SCOPE_ALWAYS, 0, "http(s) で始まるURL"),
        ("API_HOST", r"api\..*\.com", SCOPE_ALWAYS, re.IGNORECASE, "APIホストを含むURL"),
        ("FILE_PATH", r"^/[/\w-]+$", SCOPE_ALWAYS, 0, "ファイルパス"),
        ("FILE_NAME", r"^[\w-]+\.(js|css|png|jpg|gif|svg)$", SCOPE_ALWAYS, re.IGNORECASE, "拡張子付きファイル名"),
        # 数値/定数
        ("NUMERIC", r"^[0-9\s\-+()]+$", SCOPE_ALWAYS, 0, "数字と記号のみ"),
        ("UPPER_CONSTANT", r"^[A-Z_]{5,}$", SCOPE_ALWAYS, 0, "API_KEY のような長い定数"),
        ("UPPER_SNAKE", r"^[A-Z]+_[A-Z0-9_]+$", SCOPE_ALWAYS, 0, "API_KEY_123 のような定数"),
        ("SCRIPT_CONSTANT", r"^[A-Z][A-Z0-9_]{4,}$", SCOPE_SCRIPT, 0, "スクリプト中の定数名"),
        ("BLANK", r"^\s*$", SCOPE_ALWAYS, 0, "空白のみ"),
        # 識別子
        ("CAMEL_CASE", r"^[a-z]+([A-Z][a-z]*)*$", SCOPE_ALWAYS, 0, "handleUserClick のような camelCase"),
        ("CAMEL_CASE_MULTI", r"^[a-z]+[A-Z][a-z]*[A-Z][a-z]*$", SCOPE_ALWAYS, 0, "大文字を2つ以上含む camelCase"),
        ("CSS_CLASS", r"^[a-z]+-[a-z-]+$", SCOPE_ALWAYS, 0, "btn-primary のようなCSSクラス"),
        ("CSS_CLASS_MULTI", r"^[a-z]+-[a-z]+-[a-z-]+$", SCOPE_ALWAYS, 0, "btn-primary-large"),
        ("KEBAB_CASE", r"^[a-zA-Z]*-[a-zA-Z-]*$", SCOPE_NON_ATTRIBUTE, 0, "空白を含まないハイフン区切り語"),
        ("SNAKE_CASE", r"^[a-z]+_[a-z_]+$", SCOPE_ALWAYS, re.IGNORECASE, "snake_case 変数"),
        # 短い技術語
        ("SHORT_WORD", r"^(ok|yes|no|true|false)$", SCOPE_ALWAYS, re.IGNORECASE, "ok/true などの短い技術語"),
        ("TECH_ABBR", r"^(src|alt|id|css|js|php|html|xml|json)$", SCOPE_ALWAYS, re.IGNORECASE, "技術的な略語"),
        ("TOO_SHORT", r"^\w{1,2}$", SCOPE_ALWAYS, 0, "1-2文字"),
        # 記号/演算子
        ("ESCAPE_SEQUENCE", r"^\\[nrtbfv\\'\"0]$", SCOPE_ALWAYS, 0, "\\n などのエスケープ"),
        ("SYMBOLS", r"^[\\/*{}\[\]()<>;,.:!?'\"=+\-~^&|%$#@]+$", SCOPE_ALWAYS, 0, "記号のみ"),
        ("COMMENT_MARKER", r"^(/\*|\*/|//)$", SCOPE_ALWAYS, 0, "コメント記号"),
        ("BRACKET", r"^[{}\[\]()<>]$", SCOPE_ALWAYS, 0, "括弧1文字"),
        ("PUNCTUATION", r"^[;,.:!?'\"]+$", SCOPE_ALWAYS, 0, "句読点のみ"),
        ("OPERATORS", r"^[+\-*/%=&|^~<>]+$", SCOPE_ALWAYS, 0, "演算子のみ"),
        # テンプレート/コード断片
        ("TEMPLATE_EXPRESSION", r"^\$\{", SCOPE_ALWAYS, 0, "${...} で始まる"),
        ("CLOSING_BRACE", r"^.*\}$", SCOPE_ALWAYS, 0, "} で終わる"),
        ("CONCATENATION", r"^.*content\s*\+=", SCOPE_ALWAYS, 0, "content += の連結"),
        ("SEMICOLON", r"^;\s*$", SCOPE_ALWAYS, 0, "セミコロンのみ"),
        ("REGEX_OPEN_GROUP", r"^['\"]\([^'\"]*$", SCOPE_ALWAYS, 0, "正規表現の断片"),
        ("REGEX_CLASS_TAIL", r"^\][^'\"]*['\"]*$", SCOPE_ALWAYS, 0, "正規表現の断片"),
        ("REGEX_CLOSE_GROUP", r"^[^'\"]*\)['\"]*$", SCOPE_ALWAYS, 0, "正規表現の断片"),
        ("SWITCH_CASE", r"^:\s*\n\s*case\s*$", SCOPE_ALWAYS, 0, "switch の case 断片"),
        ("COMMA_NEWLINE", r"^,\s*\n\s*$", SCOPE_ALWAYS, 0, "カンマと改行"),
        ("REGEX_LITERAL", r"^/.*/[gimsuyx]*$", SCOPE_ALWAYS, 0, "/pattern/flags"),
    ]
    return [
        ClassifierRule(rule_id=rid, pattern=re.compile(p, flags), scope=scope, description=desc)
        for rid, p, scope, flags, desc in raw
    ]


BUILTIN_RULES: tuple[ClassifierRule, ...] = tuple(_rules())

_EXTRA_RULES: List[ClassifierRule] = []


def add_rules(rules: Iterable[ClassifierRule]) -> None:
    _EXTRA_RULES.extend(rules)


def reset_rules() -> None:
    _EXTRA_RULES.clear()


def active_rules() -> List[ClassifierRule]:
    return [*BUILTIN_RULES, *_EXTRA_RULES]


def rule_hits(text: str, is_attribute: bool = False, is_script: bool = False) -> List[str]:
    t = text.strip()
    return [
        r.rule_id
        for r in active_rules()
        if r.applies(is_attribute, is_script) and r.matches(t)
    ]


def is_non_textual(text: str, is_attribute: bool = False, is_script: bool = False) -> bool:
    t = text.strip()
    return any(
        r.applies(is_attribute, is_script) and r.matches(t)
        for r in active_rules()
    )


# --- スクリプトの文字列リテラル専用の形状フィルタ（trim前の中身に適用） ---

_CODE_FRAGMENT_RES = [
    re.compile(r"^[\[\](){}.*+?^$\\|]+$"),  # 正規表現の特殊文字のみ
    re.compile(r"^\[.*\]$"),  # [^"'`] のような文字クラス
    re.compile(r"^\(.*\)$"),  # ([^"'`]+) のようなグループ
    re.compile(r"^\\[a-z]$"),  # \t, \n
    re.compile(r"\[\^[^\[\]]*\]"),  # 否定文字クラス
    re.compile(r"\$\{|\}\$"),  # テンプレート構文
    re.compile(r"\$t\(|\.t\(|i18n\.t\("),  # 翻訳関数のパターン
    re.compile(r"\bt\s*\("),  # t(...) 呼び出しを含む
]

# 文字/数字/空白を一切含まない（記号のみ）。ラテン/キリル/ギリシャ/ヘブライ/アラビア/CJK/かな/ハングル
_SPECIAL_CHARS_ONLY_RE = re.compile(
    r"^[^a-zA-Z0-9\s\u00C0-\u017F\u0100-\u024F\u1E00-\u1EFF\u0400-\u04FF\u0370-\u03FF"
    r"\u0590-\u05FF\u0600-\u06FF\u4E00-\u9FFF\u3040-\u309F\u30A0-\u30FF\uAC00-\uD7AF]+$"
)


def is_code_fragment(raw: str) -> bool:
    if len(raw) <= 2:
        return True
    if _SPECIAL_CHARS_ONLY_RE.search(raw):
        return True
    return any(p.search(raw) for p in _CODE_FRAGMENT_RES)


__all__ = [
    "ClassifierRule",
    "BUILTIN_RULES",
    "MIN_TEXT_LENGTH",
    "SCOPES",
    "SCOPE_ALWAYS",
    "SCOPE_NON_ATTRIBUTE",
    "SCOPE_SCRIPT",
    "add_rules",
    "reset_rules",
    "active_rules",
    "rule_hits",
    "is_non_textual",
    "is_code_fragment",
]
