import pytest

from uitextscan import parse_content
from uitextscan.extractors import (
    extract_by_extension,
    extract_html,
    extract_markup,
    extract_script,
    find_markup_regions,
)
from samples import HTML_SAMPLE, JSX_SAMPLE, VUE_SAMPLE


def _texts(result, category):
    return [f.text for f in result.extracted[category]]


def test_all_categories_present_even_when_empty():
    result = parse_content("const a = 1;\n", ".ts")
    assert set(result.extracted) == {"html_text", "attributes", "strings"}
    assert list(result.fragments()) == []


def test_vue_template_and_script():
    result = parse_content(VUE_SAMPLE, ".vue")
    assert _texts(result, "html_text") == ["Welcome to the dashboard"]
    assert _texts(result, "attributes") == ["Search products"]
    assert _texts(result, "strings") == ["Your order has shipped"]
    assert result.extracted["html_text"][0].context == "template"
    assert result.extracted["attributes"][0].attribute == "placeholder"
    s = result.extracted["strings"][0]
    assert s.context == "script"
    assert VUE_SAMPLE[s.absolute_start:s.absolute_end] == "Your order has shipped"
    assert s.line_number == 12


def test_vue_mustache_and_dynamic_binding_are_skipped():
    src = (
        "<template>\n"
        '  <a :title="Dynamic title text" placeholder="{{ hint }}">{{ label }}</a>\n'
        "</template>\n"
    )
    result = parse_content(src, ".vue")
    assert list(result.fragments()) == []


def test_vue_uses_first_template_only():
    src = (
        "<template><p>First block text</p></template>\n"
        "<template><p>Second block text</p></template>\n"
    )
    result = parse_content(src, ".vue")
    assert _texts(result, "html_text") == ["First block text"]


def test_html_markup_and_embedded_script():
    result = parse_content(HTML_SAMPLE, ".html")
    assert _texts(result, "html_text") == ["Save changes"]
    assert _texts(result, "attributes") == ["Save your changes"]
    assert _texts(result, "strings") == ["Your session will expire soon"]
    s = result.extracted["strings"][0]
    assert HTML_SAMPLE[s.absolute_start:s.absolute_end] == "Your session will expire soon"
    assert s.line_number == 5
    assert s.original_match == '"Your session will expire soon"'


def test_html_attribute_names_are_case_insensitive():
    result = parse_content('<div TITLE="Hover for details"></div>', ".html")
    attrs = result.extracted["attributes"]
    assert [(f.attribute, f.text) for f in attrs] == [("TITLE", "Hover for details")]


def test_html_braces_are_plain_text():
    result = parse_content("<p>Use {curly} braces freely</p>", ".html")
    assert _texts(result, "html_text") == ["Use {curly} braces freely"]


def test_component_markup_and_script():
    result = parse_content(JSX_SAMPLE, ".tsx")
    assert _texts(result, "html_text") == ["Latest updates"]
    assert _texts(result, "attributes") == ["Activity panel"]
    assert _texts(result, "strings") == ["Recent activity"]
    assert result.extracted["html_text"][0].line_number == 6


def test_component_attribute_outside_return_is_not_a_string():
    src = 'const badge = <span title="Account settings">x</span>;\n'
    result = parse_content(src, ".jsx")
    assert "Account settings" not in _texts(result, "strings")


def test_component_plain_strings_survive_attribute_check():
    src = 'const label = "Sign in to continue";\n'
    result = parse_content(src, ".jsx")
    assert _texts(result, "strings") == ["Sign in to continue"]


def test_find_markup_regions_balances_parens():
    src = "function A() {\n  return (\n    <p>{f(x)}</p>\n  );\n}\n"
    regions = find_markup_regions(src)
    assert len(regions) == 1
    start, end = regions[0]
    assert src[start:end] == "<p>{f(x)}</p>"


def test_markup_inner_text_collapses_whitespace():
    frags = extract_markup("<p>\n  Hello\n  there   friend\n</p>")
    assert [f.text for f in frags] == ["Hello there friend"]


def test_embedded_html_region_is_rehomed():
    prefix = "<!-- header -->\n\n"
    source = prefix + HTML_SAMPLE
    frags = extract_html(HTML_SAMPLE, bias=len(prefix), source=source)
    assert len(frags) == 3
    for f in frags:
        assert source[f.original_absolute_start:f.original_absolute_end] == f.original_match
        assert f.line_number == source.count("\n", 0, f.absolute_start) + 1


def test_script_extraction_requires_source_for_bias():
    with pytest.raises(ValueError):
        extract_script('"Hello there"', bias=3)


def test_unknown_extension_yields_empty_categories():
    grouped = extract_by_extension('const a = "Hello there";', ".md")
    assert grouped == {"html_text": [], "attributes": [], "strings": []}


def test_component_string_after_comparison_is_kept():
    src = (
        "const Greeting = () => <h1>Hi</h1>;\n"
        'if (items.length < 1) { const title = "No items available yet"; }\n'
    )
    assert _texts(parse_content(src, ".jsx"), "strings") == ["No items available yet"]
    assert _texts(parse_content(src, ".js"), "strings") == ["No items available yet"]


def test_html_script_markup_attribute_is_counted_once():
    src = (
        "<div>\n"
        "  <script>\n"
        "    const tpl = '<input placeholder=\"Type your full name\">';\n"
        "  </script>\n"
        "</div>\n"
    )
    result = parse_content(src, ".html")
    assert _texts(result, "attributes") == ["Type your full name"]
    assert "Type your full name" not in _texts(result, "strings")
