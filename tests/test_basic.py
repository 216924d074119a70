from uitextscan import parse_content


def _all(result):
    return list(result.fragments())


def test_script_literal_is_extracted():
    src = 'const greeting = "Hello world, welcome to our application";\n'
    result = parse_content(src, ".js")
    frags = _all(result)
    assert len(frags) == 1, frags
    f = frags[0]
    assert f.text == "Hello world, welcome to our application"
    assert f.kind == "string"
    assert f.context == "script"
    assert f.line_number == 1
    assert f.absolute_start == 18
    assert f.original_match == '"Hello world, welcome to our application"'


def test_console_log_argument_is_ignored():
    src = (
        'const greeting = "Hello world, welcome to our application";\n'
        'console.log("debug", x);\n'
    )
    frags = _all(parse_content(src, ".js"))
    assert [f.text for f in frags] == ["Hello world, welcome to our application"]


def test_markup_text_and_attribute():
    src = '<p title="Click here">Welcome</p>'
    result = parse_content(src, ".html")
    texts = result.extracted["html_text"]
    attrs = result.extracted["attributes"]
    assert [f.text for f in texts] == ["Welcome"]
    assert texts[0].original_match == ">Welcome<"
    assert len(attrs) == 1
    assert attrs[0].attribute == "title"
    assert attrs[0].text == "Click here"
    assert attrs[0].original_match == 'title="Click here"'


def test_component_attribute_and_import():
    src = (
        "import x from 'y';\n"
        "\n"
        "export default function Logo() {\n"
        "  return (\n"
        "    <div>\n"
        '      <img alt="Logo" />\n'
        "    </div>\n"
        "  );\n"
        "}\n"
    )
    frags = _all(parse_content(src, ".jsx"))
    assert len(frags) == 1, frags
    f = frags[0]
    assert f.kind == "attribute"
    assert f.attribute == "alt"
    assert f.text == "Logo"
    assert src[f.absolute_start:f.absolute_end] == "Logo"
    assert f.line_number == 6


def test_unsupported_extension_returns_none(caplog):
    assert parse_content("hello", ".md") is None
    assert "Unsupported file type" in caplog.text


def test_uppercase_extension_is_accepted():
    result = parse_content('const a = "Nice to meet you";', ".JS")
    assert result is not None
    assert result.extension == ".js"
