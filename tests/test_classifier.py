import pytest

from uitextscan.classifier import (
    BUILTIN_RULES,
    is_code_fragment,
    is_non_textual,
    rule_hits,
)


@pytest.mark.parametrize("text", [
    "OK",
    "handleUserClick",
    "btn-primary",
    "API_KEY_123",
    "https://api.example.com/users",
    "/assets/images",
    "logo.png",
    "user_name",
    "&copy;",
    "123-456 (7)",
    "   ",
    "${value}",
    "/^[a-z]+$/gi",
    "=>",
])
def test_technical_strings_are_non_textual(text):
    assert is_non_textual(text)


@pytest.mark.parametrize("text", [
    "Welcome to our application",
    "Hello world, welcome to our application",
    "Merhaba dünya, uygulamamıza hoş geldiniz",
    "私たちのアプリケーションへようこそ",
    "Save changes",
])
def test_natural_language_is_textual(text):
    assert not is_non_textual(text)


def test_text_is_trimmed_before_matching():
    assert is_non_textual("  ok  ")


def test_kebab_rule_is_skipped_for_attributes():
    assert is_non_textual("Sign-in")
    assert not is_non_textual("Sign-in", is_attribute=True)
    assert "KEBAB_CASE" not in rule_hits("Sign-in", is_attribute=True)


def test_css_class_rule_still_applies_to_attributes():
    # 属性でも btn-primary 形は CSS_CLASS ルールで除外される
    assert is_non_textual("btn-primary", is_attribute=True)
    assert "CSS_CLASS" in rule_hits("btn-primary", is_attribute=True)


def test_script_only_constant_rule():
    assert "SCRIPT_CONSTANT" in rule_hits("ABC123", is_script=True)
    assert "SCRIPT_CONSTANT" not in rule_hits("ABC123")


def test_rule_ids_are_unique():
    ids = [r.rule_id for r in BUILTIN_RULES]
    assert len(ids) == len(set(ids))


def test_rule_hits_reports_camel_case():
    assert "CAMEL_CASE" in rule_hits("handleUserClick")


@pytest.mark.parametrize("raw", [
    "ab",
    "[^\"'`]",
    "([^\"'`]+)",
    "\\n",
    "${name}",
    "$t('home.title')",
    "i18n.t('x')",
    "***",
    "-->",
])
def test_code_fragments(raw):
    assert is_code_fragment(raw)


def test_plain_sentence_is_not_code_fragment():
    assert not is_code_fragment("Your order has shipped")
    assert not is_code_fragment("Добро пожаловать")
