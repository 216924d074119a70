"""uitextscan
JS/JSX/TS/TSX/Vue/HTML のソースから、画面に表示される自然言語テキストを抽出するライブラリ。

主な提供機能:
- 文字列リテラル/テキストノード/自然言語属性(title, alt, placeholder...)の抽出
- 抽出結果ごとの行・桁・絶対オフセット(区切り文字込みの範囲も)の付与
- コード片/URL/識別子/正規表現断片を除外するルール表
- 抽出範囲をダミー文で置き換える置換処理
- CLI インターフェース (JSON/テキスト出力)
"""
from .parser import parse_content, parse_file, parse_paths, SUPPORTED_EXTENSIONS
from .fragment import ExtractedFragment, ParsedFileResult
from .summary import Summary, build_summary
from .replacer import replace_fragments
from .classifier import is_non_textual

__all__ = [
    "parse_content",
    "parse_file",
    "parse_paths",
    "SUPPORTED_EXTENSIONS",
    "ExtractedFragment",
    "ParsedFileResult",
    "Summary",
    "build_summary",
    "replace_fragments",
    "is_non_textual",
]

__version__ = "0.1.0"
