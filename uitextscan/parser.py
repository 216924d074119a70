"""高レベル API: テキスト/ファイル/パス群からの自然言語テキスト抽出

- 前処理(sanitize)で コメント/正規表現/タグ/URL を無害化
- 拡張子ごとの抽出パイプライン
- パス走査と簡易キャッシュ/並列
"""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
import logging
from pathlib import Path
from typing import Collection, Dict, Iterable, List, Tuple

from .cache import cached_result, file_fingerprint, load_cache, save_cache, store_result
from .extractors import extract_by_extension
from .file_scanner import DEFAULT_SKIP_DIRS, iter_files, read_text
from .fragment import ParsedFileResult
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".vue", ".html")


def is_supported(path: str | Path) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def parse_content(
    content: str,
    extension: str,
    file_path: str | None = None,
    file_name: str | None = None,
) -> ParsedFileResult | None:
    ext = extension.lower()
    if ext not in SUPPORTED_EXTENSIONS:
        logger.warning("Unsupported file type: %s", extension)
        return None
    grouped = extract_by_extension(sanitize(content), ext)
    return ParsedFileResult(
        extension=ext,
        extracted={name: tuple(items) for name, items in grouped.items()},
        timestamp=_now_iso(),
        file_path=file_path,
        file_name=file_name,
    )


def parse_file(path: str | Path) -> ParsedFileResult | None:
    p = Path(path)
    if not is_supported(p):
        logger.warning("Unsupported file type: %s (%s)", p.suffix or "<none>", p)
        return None
    content = read_text(p)
    if content is None:
        return None
    return parse_content(content, p.suffix, file_path=str(p), file_name=p.name)


def parse_paths(
    paths: Iterable[str],
    jobs: int = 1,
    use_cache: bool = False,
    skip_dirs: Collection[str] = DEFAULT_SKIP_DIRS,
    cache_root: str | None = None,
) -> List[ParsedFileResult]:
    """ファイル/ディレクトリ群を走査し、入力順に結果を返す。

    1ファイルの失敗は他のファイルの処理に影響しない。
    """
    # 同じファイルの重複指定 (ディレクトリ + その中のファイル など) は1回だけ処理
    files = list(dict.fromkeys(
        str(f) for f in iter_files(paths, skip_dirs=skip_dirs, accept=is_supported)
    ))
    root = cache_root or str(Path.cwd())

    cache = load_cache(root) if use_cache else {}
    results: Dict[str, ParsedFileResult] = {}
    to_scan: List[Tuple[str, str | None]] = []  # (path, fingerprint)

    for key in files:
        fp: str | None = None
        if use_cache:
            try:
                fp = file_fingerprint(Path(key))
            except OSError as e:
                logger.error("Error reading file %s: %s", key, e)
                continue
            hit = cached_result(cache, key, fp)
            if hit is not None:
                results[key] = hit
                continue
        to_scan.append((key, fp))

    def _record(key: str, fp: str | None, res: ParsedFileResult | None) -> None:
        if res is None:
            return
        results[key] = res
        if use_cache and fp is not None:
            store_result(cache, key, fp, res)

    # 並列/直列実行
    if jobs and jobs > 1:
        with ThreadPoolExecutor(max_workers=jobs) as ex:
            futs = {ex.submit(parse_file, key): (key, fp) for key, fp in to_scan}
            for fut in as_completed(futs):
                key, fp = futs[fut]
                try:
                    res = fut.result()
                except (OSError, ValueError) as e:
                    logger.error("Error parsing file %s: %s", key, e)
                    res = None
                _record(key, fp, res)
    else:
        for key, fp in to_scan:
            _record(key, fp, parse_file(key))

    # キャッシュ保存
    if use_cache:
        save_cache(root, cache)

    return [results[key] for key in files if key in results]


__all__ = ["SUPPORTED_EXTENSIONS", "is_supported", "parse_content", "parse_file", "parse_paths"]
