import pytest

from kornshell.printing import (
    BuiltinError,
    EchoOptions,
    expand_escapes,
    parse_echo_args,
    render_print,
    substitute_directory,
)


def test_simple_escapes():
    assert expand_escapes("a\\tb\\nc") == ("a\tb\nc", False)


def test_bell_and_vertical_tab():
    assert expand_escapes("\\a\\v") == ("\x07\x0b", False)


def test_backslash_c_suppresses_newline():
    text, stop = expand_escapes("ab\\cde")
    assert stop is True
    assert text == "abde"


def test_octal_escape():
    assert expand_escapes("\\0101")[0] == "A"


def test_octal_escape_reads_at_most_three_digits():
    text, _ = expand_escapes("\\01017")
    assert text == "A7"


def test_unknown_escape_kept():
    assert expand_escapes("\\q") == ("\\q", False)


def test_trailing_backslash_kept():
    assert expand_escapes("x\\") == ("x\\", False)


def test_double_backslash():
    assert expand_escapes("\\\\n") == ("\\n", False)


def test_echo_n_option():
    options, words = parse_echo_args(["-n", "hi"])
    assert options == EchoOptions(newline=False, expand=True)
    assert words == ["hi"]


def test_echo_bad_option_is_printed():
    options, words = parse_echo_args(["-nq", "hi"])
    assert options == EchoOptions()
    assert words == ["-nq", "hi"]


def test_echo_combined_options():
    options, words = parse_echo_args(["-nE", "-e", "x"])
    assert options == EchoOptions(newline=False, expand=True)
    assert words == ["x"]


def test_echo_capital_e_disables_expansion():
    options, words = parse_echo_args(["-E", "a"])
    assert options.expand is False
    assert words == ["a"]


def test_echo_lone_dash_is_a_word():
    options, words = parse_echo_args(["-", "x"])
    assert words == ["-", "x"]
    assert options.newline is True


def test_echo_posix_only_takes_n():
    options, words = parse_echo_args(["-e", "x"], posix=True)
    assert words == ["-e", "x"]
    options, words = parse_echo_args(["-n", "x"], posix=True)
    assert options.newline is False
    assert words == ["x"]


def test_render_joins_with_spaces():
    assert render_print(["a", "b"]) == "a b\n"


def test_render_backslash_c_drops_newline():
    assert render_print(["x\\c", "y"]) == "x y"


def test_render_raw():
    assert render_print(["a\\tb"], expand=False, newline=False) == "a\\tb"


def test_render_empty():
    assert render_print([]) == "\n"


def test_substitute_directory():
    assert substitute_directory("/usr/local/bin", "local", "share") == "/usr/share/bin"


def test_substitute_only_first():
    result = substitute_directory("/a/x/x", "x", "y")
    assert result == "/a/y/x"


def test_substitute_missing():
    with pytest.raises(BuiltinError, match="bad substitution"):
        substitute_directory("/usr/bin", "nope", "x")


def test_substitute_without_cwd():
    with pytest.raises(BuiltinError, match="current directory"):
        substitute_directory("", "a", "b")