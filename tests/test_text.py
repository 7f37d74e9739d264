import yaml

from kubeshark.text import Color, colorize, pretty_yaml, unescape_unicode_characters


def test_colorize_yellow():
    assert colorize("hi", Color.YELLOW) == "\033[1;33mhi\033[0m"


def test_colorize_wraps_text_for_every_color():
    for color in Color:
        result = colorize("text %d", color)
        assert result.startswith("\033[1;3")
        assert result.endswith("m" + "text %d" + "\033[0m")


def test_unescape_converts_escape():
    assert unescape_unicode_characters(r"caf\u00e9") == "caf\u00e9"


def test_unescape_multiple_escapes():
    assert unescape_unicode_characters(r"\u0048\u0069!") == "\u0048\u0069!"


def test_unescape_plain_text_unchanged():
    assert unescape_unicode_characters('plain "text" here') == 'plain "text" here'


def test_unescape_malformed_returns_raw():
    raw = r"bad \u12"
    assert unescape_unicode_characters(raw) == raw


def test_unescape_non_hex_returns_raw():
    raw = r"\uzzzz"
    assert unescape_unicode_characters(raw) == raw


def test_unescape_surrogate_returns_raw():
    raw = r"\ud800"
    assert unescape_unicode_characters(raw) == raw


def test_unescape_double_backslash_keeps_one():
    assert unescape_unicode_characters(r"\\u0041") == "\\A"


def test_unescape_other_backslashes_kept():
    raw = r"path\to\file"
    assert unescape_unicode_characters(raw) == raw


def test_pretty_yaml_round_trip():
    data = {"tap": {"namespaces": ["default", "kube-system"], "debug": False}, "name": "x"}
    assert yaml.safe_load(pretty_yaml(data)) == data


def test_pretty_yaml_indents_two_spaces():
    assert pretty_yaml({"a": {"b": 1}}) == "a:\n  b: 1\n"


def test_pretty_yaml_keeps_key_order():
    text = pretty_yaml({"zeta": 1, "alpha": 2})
    assert text.index("zeta") < text.index("alpha")