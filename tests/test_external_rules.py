import json
import tempfile

import pytest

from uitextscan.classifier import add_rules, is_non_textual, reset_rules, rule_hits
from uitextscan.external_rules import load_rule_file
from uitextscan import parse_content


@pytest.fixture(autouse=True)
def _clean_rules():
    reset_rules()
    yield
    reset_rules()


def test_external_json_rule_suppresses_text():
    data = [
        {"id": "RELEASE_NOTE", "pattern": "^Release notes", "description": "社内向けの文言"}
    ]
    with tempfile.NamedTemporaryFile("w", suffix=".json", encoding="utf-8", delete=False) as f:
        json.dump(data, f, ensure_ascii=False)
        path = f.name
    src = 'const note = "Release notes for this sprint";'
    assert [x.text for x in parse_content(src, ".js").fragments()] == ["Release notes for this sprint"]
    add_rules(load_rule_file(path))
    assert "RELEASE_NOTE" in rule_hits("Release notes for this sprint")
    assert list(parse_content(src, ".js").fragments()) == []


def test_yaml_rule_with_scope(tmp_path):
    p = tmp_path / "rules.yaml"
    p.write_text(
        "- pattern: '^Beta\\b'\n"
        "  scope: non_attribute\n",
        encoding="utf-8",
    )
    rules = load_rule_file(str(p))
    assert [r.rule_id for r in rules] == ["EXTERNAL_1"]
    add_rules(rules)
    assert is_non_textual("Beta feature enabled")
    assert not is_non_textual("Beta feature enabled", is_attribute=True)


def test_utf16_rule_file_is_decoded(tmp_path):
    p = tmp_path / "rules.json"
    p.write_bytes(json.dumps([{"pattern": "^x+$"}]).encode("utf-16"))
    assert len(load_rule_file(str(p))) == 1


@pytest.mark.parametrize("payload", [
    {"pattern": "^a$"},
    [{"description": "no pattern"}],
    [{"pattern": "^a$", "scope": "everywhere"}],
    [{"pattern": "([unclosed"}],
])
def test_invalid_rule_files(tmp_path, payload):
    p = tmp_path / "bad.json"
    p.write_text(json.dumps(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_rule_file(str(p))


def test_missing_rule_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rule_file(str(tmp_path / "absent.yaml"))
