from pathlib import Path

from app_deploy.helpers import normalize_string_list, replace_all_strings, to_string_safe


def test_to_string_safe_coerces_values():
    assert to_string_safe(None) == ""
    assert to_string_safe(None, "x") == "x"
    assert to_string_safe("abc") == "abc"
    assert to_string_safe(12) == "12"
    assert to_string_safe(b"caf\xc3\xa9") == "café"
    assert to_string_safe(Path("/a/b.txt")) == str(Path("/a/b.txt"))


def test_to_string_safe_falls_back_when_str_fails():
    class Broken:
        def __str__(self):
            raise RuntimeError("nope")

    assert to_string_safe(Broken(), "fallback") == "fallback"


def test_replace_all_strings_is_literal_and_global():
    assert replace_all_strings("${file} and ${file}", "${file}", "/a.txt") == "/a.txt and /a.txt"
    assert replace_all_strings("a.b.c", ".", "$1") == "a$1b$1c"
    assert replace_all_strings(None, "${file}", "x") == ""
    assert replace_all_strings("keep", "", "x") == "keep"


def test_normalize_string_list():
    assert normalize_string_list(None) is None
    assert normalize_string_list("--flag") == ["--flag"]
    assert normalize_string_list(["a", 1, None]) == ["a", "1", ""]
