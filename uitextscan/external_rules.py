"""YAML / JSON から ClassifierRule をロードするユーティリティ。
フォーマット例:

YAML:
---
- id: TICKET_ID
  pattern: "^[A-Z]+-[0-9]+$"
  description: "JIRA-123 のようなチケット番号"
- id: HEX_COLOR
  pattern: "^#[0-9a-fA-F]{3,6}$"
  scope: always

JSON: 上記と同じ構造の配列。scope は always / non_attribute / script (既定: always)。
"""
from __future__ import annotations
from pathlib import Path
import json
import re

import yaml

from .classifier import ClassifierRule, SCOPES, SCOPE_ALWAYS


def _decode(raw: bytes) -> str:
    # いくつかのエンコーディング候補を試す (PowerShell Set-Content デフォルト UTF-16 対応)
    for enc in ("utf-8", "utf-8-sig", "utf-16", "utf-16-le", "utf-16-be", "cp932"):
        try:
            return raw.decode(enc)
        except UnicodeDecodeError:
            continue
    raise ValueError("Unable to decode rule file with tried encodings")


def load_rule_file(path: str) -> list[ClassifierRule]:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(path)
    text = _decode(p.read_bytes()).lstrip("\ufeff")
    if p.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    else:
        data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("ルールファイルは配列である必要があります")
    rules: list[ClassifierRule] = []
    for n, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            continue
        pat = item.get("pattern")
        if not pat:
            raise ValueError(f"rule #{n}: pattern is required")
        scope = str(item.get("scope") or SCOPE_ALWAYS).lower()
        if scope not in SCOPES:
            raise ValueError(f"rule #{n}: unknown scope {scope!r}")
        try:
            compiled = re.compile(pat)
        except re.error as e:
            raise ValueError(f"Invalid regex: {pat}: {e}") from e
        rules.append(ClassifierRule(
            rule_id=str(item.get("id") or f"EXTERNAL_{n}"),
            pattern=compiled,
            scope=scope,
            description=str(item.get("description") or ""),
        ))
    return rules


__all__ = ["load_rule_file"]
