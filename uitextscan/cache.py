"""抽出結果の簡易キャッシュ。

{"<path>": {"fingerprint": "<mtime_ns>:<size>", "result": {...ParsedFileResult...}}} を JSON で保存する。
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Any

from .fragment import ParsedFileResult

logger = logging.getLogger(__name__)

DEFAULT_CACHE = ".uitextscan_cache.json"


def load_cache(root: str, filename: str = DEFAULT_CACHE) -> Dict[str, Any]:
    p = Path(root) / filename
    if not p.is_file():
        return {}
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable cache %s: %s", p, e)
        return {}
    return data if isinstance(data, dict) else {}


def save_cache(root: str, data: Dict[str, Any], filename: str = DEFAULT_CACHE) -> None:
    p = Path(root) / filename
    try:
        p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    except OSError as e:
        logger.error("Error writing cache %s: %s", p, e)


def file_fingerprint(path: Path) -> str:
    stat = path.stat()
    return f"{stat.st_mtime_ns}:{stat.st_size}"


def cached_result(cache: Dict[str, Any], key: str, fingerprint: str) -> ParsedFileResult | None:
    entry = cache.get(key)
    if not isinstance(entry, dict) or entry.get("fingerprint") != fingerprint:
        return None
    try:
        return ParsedFileResult.from_dict(entry["result"])
    except (KeyError, TypeError, ValueError):
        return None


def store_result(cache: Dict[str, Any], key: str, fingerprint: str, result: ParsedFileResult) -> None:
    cache[key] = {"fingerprint": fingerprint, "result": result.to_dict()}


__all__ = [
    "load_cache",
    "save_cache",
    "file_fingerprint",
    "cached_result",
    "store_result",
    "DEFAULT_CACHE",
]
