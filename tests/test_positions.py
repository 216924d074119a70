import pytest

from uitextscan import parse_content
from uitextscan.fragment import ExtractedFragment
from uitextscan.position import position_info
from samples import SAMPLES


def test_position_on_second_line():
    pos = position_info("ab\ncd", 3, 5)
    assert (pos.line_number, pos.column_start, pos.column_end) == (2, 0, 2)
    assert (pos.absolute_start, pos.absolute_end) == (3, 5)


def test_position_spanning_lines_projects_column_end():
    pos = position_info("a\nbc\nd", 2, 6)
    assert pos.line_number == 2
    assert pos.column_start == 0
    assert pos.column_end == 4


def test_shifted_matches_direct_build():
    source = "line one\nprefix <b>Nice words</b>"
    offset = source.index("<b>")
    sub = source[offset:]
    local = ExtractedFragment.build(sub, "Nice words", "html_text", "markup", 3, 13, 2, 14)
    direct = ExtractedFragment.build(source, "Nice words", "html_text", "markup",
                                     offset + 3, offset + 13, offset + 2, offset + 14)
    assert local.shifted(offset, source) == direct
    # 元のインスタンスは変わらない
    assert local.absolute_start == 3


@pytest.mark.parametrize("ext", sorted(SAMPLES))
def test_span_invariants(ext):
    content = SAMPLES[ext]
    frags = list(parse_content(content, ext).fragments())
    assert frags
    for f in frags:
        assert f.absolute_start < f.absolute_end
        assert f.original_absolute_start <= f.absolute_start
        assert f.absolute_end <= f.original_absolute_end
        assert content[f.original_absolute_start:f.original_absolute_end] == f.original_match
        assert " ".join(content[f.absolute_start:f.absolute_end].split()) == " ".join(f.text.split())
        assert f.line_number == content.count("\n", 0, f.absolute_start) + 1
        assert f.text in content.splitlines()[f.line_number - 1]


def test_script_literal_includes_quotes():
    content = SAMPLES[".js"]
    result = parse_content(content, ".js")
    for f in result.extracted["strings"]:
        assert f.original_absolute_end - f.original_absolute_start == (f.absolute_end - f.absolute_start) + 2
        assert f.original_match[0] in "\"'`"
        assert f.original_match[0] == f.original_match[-1]


@pytest.mark.parametrize("ext", sorted(SAMPLES))
def test_extraction_is_deterministic(ext):
    content = SAMPLES[ext]
    first = list(parse_content(content, ext).fragments())
    second = list(parse_content(content, ext).fragments())
    assert first == second
