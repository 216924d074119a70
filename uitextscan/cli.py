from __future__ import annotations
import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .classifier import add_rules
from .external_rules import load_rule_file
from .file_scanner import DEFAULT_SKIP_DIRS, read_text
from .fragment import ParsedFileResult
from .parser import SUPPORTED_EXTENSIONS, parse_paths
from .replacer import drop_overlaps, replace_fragments
from .report import build_json_report, export_json, export_text
from .summary import build_summary

SAMPLE_LIMIT = 10


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="uitextscan",
        description="JS/JSX/TS/TSX/Vue/HTML ファイルから自然言語のテキストを抽出します",
        epilog="Supported file types: " + ", ".join(SUPPORTED_EXTENSIONS),
    )
    p.add_argument("paths", nargs="*", metavar="TARGET", help="走査するファイル/ディレクトリ")
    p.add_argument("--output-json", metavar="FILE", help="結果をJSONファイルに出力")
    p.add_argument("--output-text", metavar="FILE", help="結果をテキストファイルに出力")
    p.add_argument("--json", action="store_true", help="サマリの代わりにJSONを標準出力へ")
    p.add_argument("--config", help="設定ファイル(TOML: pyproject.toml の [tool.uitextscan] / YAML)を読み込み、既定値を上書き")
    p.add_argument("--rules", action="append", metavar="FILE", help="追加の判定ルール(YAML/JSON)ファイル (複数指定は繰り返し)")
    p.add_argument("--jobs", type=int, default=1, help="並列実行のワーカー数")
    p.add_argument("--no-cache", action="store_true", help="キャッシュを使わず毎回フルスキャン")
    p.add_argument("--skip-dir", action="append", dest="skip_dirs", metavar="NAME", help="走査から除外するディレクトリ名 (既定に追加)")
    p.add_argument("--mask", action="store_true", help="抽出したテキストをダミー文で置き換えて上書き保存")
    p.add_argument("--fail-on-text", action="store_true", help="テキストが1件でも見つかれば終了コード1")
    p.add_argument("-v", "--verbose", action="count", default=0, help="ログを詳細に (-vv でデバッグ)")
    return p


def load_config(path: str) -> Dict[str, Any]:
    """設定ファイルから uitextscan 用の設定を取り出す。"""
    cfg_path = Path(path)
    if not cfg_path.is_file():
        raise FileNotFoundError(path)
    if cfg_path.suffix.lower() == ".toml":
        with cfg_path.open("rb") as f:
            cfg = tomllib.load(f)
        tool = cfg.get("tool", {})
        section = tool.get("uitextscan", {}) if isinstance(tool, dict) else {}
    elif cfg_path.suffix.lower() in {".yaml", ".yml"}:
        cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
        if not isinstance(cfg, dict):
            raise ValueError(f"config must be a mapping: {path}")
        section = cfg.get("uitextscan", cfg)
    else:
        raise ValueError(f"unsupported config format: {path}")
    if not isinstance(section, dict):
        raise ValueError(f"config section must be a mapping: {path}")
    return section


def _apply_config(args: argparse.Namespace, parser: argparse.ArgumentParser, cfg: Dict[str, Any]) -> None:
    # CLI引数が最優先。未指定の項目のみ設定で補完
    if "outputJson" in cfg and not args.output_json:
        args.output_json = str(cfg["outputJson"])
    if "outputText" in cfg and not args.output_text:
        args.output_text = str(cfg["outputText"])
    if "json" in cfg and not args.json:
        args.json = bool(cfg["json"])
    if "failOnText" in cfg and not args.fail_on_text:
        args.fail_on_text = bool(cfg["failOnText"])
    if "jobs" in cfg and args.jobs == parser.get_default("jobs"):
        args.jobs = int(cfg["jobs"])
    if "cache" in cfg and not args.no_cache:
        args.no_cache = not bool(cfg["cache"])
    if "rules" in cfg and isinstance(cfg["rules"], list):
        args.rules = [str(x) for x in cfg["rules"]] + (args.rules or [])
    if "skipDirs" in cfg and isinstance(cfg["skipDirs"], list):
        args.skip_dirs = [str(x) for x in cfg["skipDirs"]] + (args.skip_dirs or [])


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s", stream=sys.stderr)


def _print_summary(results: List[ParsedFileResult]) -> None:
    summary = build_summary(results)
    print("=== SUMMARY ===")
    print(f"Total files processed: {summary.total_files}")
    print(f"Total meaningful texts found: {summary.total_texts}")
    print("\nFile types:")
    for ext, count in summary.file_types.items():
        print(f"  {ext}: {count} files")
    print("\nText types found:")
    for name, count in summary.text_types.items():
        if count > 0:
            print(f"  {name}: {count} items")
    if summary.all_texts:
        print(f"\n=== SAMPLE TEXTS (first {SAMPLE_LIMIT}) ===")
        for n, item in enumerate(summary.all_texts[:SAMPLE_LIMIT], start=1):
            print(f'{n}. [{item.kind}] {item.file}: "{item.text}"')
        rest = len(summary.all_texts) - SAMPLE_LIMIT
        if rest > 0:
            print(f"... and {rest} more texts")


def _mask_files(results: List[ParsedFileResult]) -> int:
    touched = 0
    for result in results:
        if not result.file_path:
            continue
        p = Path(result.file_path)
        content = read_text(p)
        if content is None:
            continue
        new_content = replace_fragments(content, drop_overlaps(result.fragments()))
        if new_content == content:
            continue
        try:
            p.write_text(new_content, encoding="utf-8")
        except OSError as e:
            print(f"[warn] failed to write {p}: {e}", file=sys.stderr)
            continue
        touched += 1
    return touched


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    if args.config:
        try:
            _apply_config(args, parser, load_config(args.config))
        except (OSError, ValueError, tomllib.TOMLDecodeError, yaml.YAMLError) as e:
            print(f"Failed to load config {args.config}: {e}", file=sys.stderr)
            return 2

    if not args.paths:
        print("Error: Please specify a file or directory to parse.", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    missing = [p for p in args.paths if not Path(p).exists()]
    if missing:
        for p in missing:
            print(f"Error: Path does not exist: {Path(p).resolve()}", file=sys.stderr)
        return 1

    # 外部ルール読み込み
    for rf in args.rules or []:
        try:
            add_rules(load_rule_file(rf))
        except (OSError, ValueError, yaml.YAMLError) as e:
            print(f"Failed to load rules {rf}: {e}", file=sys.stderr)
            return 2

    use_cache = not args.no_cache
    if args.mask:
        use_cache = False  # 置換時は必ず最新内容で抽出
    skip_dirs = set(DEFAULT_SKIP_DIRS) | set(args.skip_dirs or [])

    results = parse_paths(args.paths, jobs=args.jobs, use_cache=use_cache, skip_dirs=skip_dirs)

    if args.json:
        print(json.dumps(build_json_report(results), ensure_ascii=False, indent=2))
    else:
        print(f"Parsing completed! Found {len(results)} files.\n")
        _print_summary(results)

    if args.output_json and export_json(results, args.output_json) and not args.json:
        print(f"Results exported to: {args.output_json}")
    if args.output_text and export_text(results, args.output_text) and not args.json:
        print(f"Text results exported to: {args.output_text}")

    if args.mask and results:
        touched = _mask_files(results)
        if touched and not args.json:
            print(f"Masked {touched} file(s)")

    if args.fail_on_text and any(True for r in results for _ in r.fragments()):
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
