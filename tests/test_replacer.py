import random

import pytest

from uitextscan import parse_content, replace_fragments
from uitextscan.extractors import extract_script
from uitextscan.fragment import ExtractedFragment
from uitextscan.replacer import apply_edits, drop_overlaps, generate_filler, plan_edits
from samples import JS_SAMPLE


@pytest.mark.parametrize("n", [1, 2, 5, 17, 80])
def test_filler_has_exact_length(n):
    assert len(generate_filler(n)) == n


def test_filler_is_reproducible_with_seeded_rng():
    assert generate_filler(40, random.Random(7)) == generate_filler(40, random.Random(7))
    assert generate_filler(0) == ""


def test_masking_keeps_length_and_untouched_bytes():
    frags = list(parse_content(JS_SAMPLE, ".js").fragments())
    out = replace_fragments(JS_SAMPLE, frags)
    assert len(out) == len(JS_SAMPLE)
    covered = set()
    for f in frags:
        covered.update(range(f.absolute_start, f.absolute_end))
    for i, ch in enumerate(JS_SAMPLE):
        if i not in covered:
            assert out[i] == ch
    assert 'console.error("hidden failure");' in out


def test_custom_substitute_changes_length():
    src = 'a = "Hello there"; b = "Good morning";'
    seen = []

    def sub(fragment, original):
        seen.append(original)
        return "X"

    out = replace_fragments(src, extract_script(src), substitute=sub)
    assert out == 'a = "X"; b = "X";'
    # 後ろから順に置換される
    assert seen == ["Good morning", "Hello there"]


def test_plan_edits_is_descending_and_skips_empty_spans():
    src = 'a = "Hello there"; b = "Good morning";'
    frags = extract_script(src)
    empty = ExtractedFragment.build(src, "", "string", "script", 1, 1, 0, 2)
    edits = plan_edits(src, [*frags, empty])
    assert len(edits) == 2
    assert edits[0].start > edits[1].start
    assert all(len(e.text) == e.end - e.start for e in edits)
    assert len(apply_edits(src, edits)) == len(src)


def test_drop_overlaps_keeps_first_span():
    src = "abcdefghij"
    a = ExtractedFragment.build(src, "abcde", "string", "script", 0, 5, 0, 5)
    b = ExtractedFragment.build(src, "defgh", "string", "script", 3, 8, 3, 8)
    c = ExtractedFragment.build(src, "ghi", "string", "script", 6, 9, 6, 9)
    assert drop_overlaps([c, b, a]) == [a, c]
