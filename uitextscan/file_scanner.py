"""ファイル走査ユーティリティ。

- ディレクトリ走査では node_modules / .git / dist などのビルド・依存ディレクトリを名前で除外
- バイナリらしいものは除外(ヒューリスティック)
- 読めないファイル/ディレクトリはログに残してスキップ
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Callable, Collection, Iterable, Iterator

logger = logging.getLogger(__name__)

DEFAULT_SKIP_DIRS = frozenset({"node_modules", ".git", ".next", "dist", "build", ".vscode"})

BINARY_BYTES = set(range(0, 9)) | {11, 12} | set(range(14, 32))


def is_probably_text(data: bytes, threshold: float = 0.30) -> bool:
    if not data:
        return True
    non_text = sum(b in BINARY_BYTES for b in data)
    ratio = non_text / len(data)
    return ratio < threshold


def read_text(path: Path, encoding_candidates=("utf-8", "utf-8-sig", "utf-16", "cp932", "shift_jis")) -> str | None:
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.error("Error reading file %s: %s", path, e)
        return None
    if not is_probably_text(raw):
        logger.info("skipping binary file %s", path)
        return None
    for enc in encoding_candidates:
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    logger.error("Error reading file %s: undecodable content", path)
    return None


def _log_walk_error(err: OSError) -> None:
    logger.error("Error reading directory %s: %s", err.filename, err.strerror or err)


def iter_files(
    paths: Iterable[str | os.PathLike[str]],
    skip_dirs: Collection[str] = DEFAULT_SKIP_DIRS,
    accept: Callable[[Path], bool] | None = None,
) -> Iterator[Path]:
    """paths を展開してファイルを列挙する。

    直接指定されたファイルは accept に関係なく返す。ディレクトリ配下は accept で絞り込む。
    """
    for p in paths:
        path = Path(p)
        if path.is_file():
            yield path
        elif path.is_dir():
            for root, dirs, files in os.walk(path, onerror=_log_walk_error):
                dirs[:] = sorted(d for d in dirs if d not in skip_dirs)
                for f in sorted(files):
                    candidate = Path(root) / f
                    if accept is None or accept(candidate):
                        yield candidate
        else:
            logger.warning("path does not exist: %s", path)


__all__ = ["iter_files", "read_text", "is_probably_text", "DEFAULT_SKIP_DIRS"]
