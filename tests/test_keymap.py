import pytest

from kornshell.editing import EditChars
from kornshell.keymap import (
    BindingError,
    FunctionSpec,
    KeyBinding,
    KeyMap,
    ctrl,
    decode_keys,
    default_keymap,
    encode_keys,
    function_names,
    unctrl,
)


def test_ctrl_and_unctrl():
    assert ctrl("G") == "\x07"
    assert ctrl("?") == "\x7f"
    assert ctrl("[") == "\x1b"
    assert unctrl("\x7f") == "?"
    for letter in "ABCXYZ[]^_":
        assert unctrl(ctrl(letter)) == letter


def test_encode_keys_control_notation():
    assert encode_keys("^G") == "\x07"
    assert encode_keys("^[b") == "\x1bb"
    assert encode_keys("a^") == "a^"
    assert encode_keys("^1") == "^1"


@pytest.mark.parametrize("text", ["^X^Y", "^[[A", "^?", "abc", "^[^H"])
def test_decode_encode_round_trip(text):
    assert decode_keys(encode_keys(text)) == text


def test_decode_keys_leaves_printables():
    assert decode_keys("hello") == "hello"
    assert decode_keys("\x1b[3~") == "^[[3~"


def test_function_names_excludes_unbindable():
    names = function_names()
    assert "macro-string" not in names
    assert "set-arg" not in names
    assert names[0] == "abort"
    assert "comment" in names
    assert len(names) == len(set(names))


def test_default_keymap_finds_bindings():
    keymap = default_keymap()
    binding = keymap.find(ctrl("G"))
    assert binding is not None
    assert binding.function.name == "abort"
    assert keymap.find("\x1b[1;5C").function.name == "forward-word"
    assert keymap.find("\x1b5").function.name == "set-arg"
    assert keymap.find("zz") is None


def test_match_partial_and_complete():
    keymap = default_keymap()
    binding, pending = keymap.match(ctrl("A"))
    assert binding.function.name == "beginning-of-line"
    assert pending is False
    binding, pending = keymap.match("\x1b")
    assert binding is None
    assert pending is True
    binding, pending = keymap.match("q")
    assert binding is None
    assert pending is False


def test_has_prefix():
    keymap = default_keymap()
    assert keymap.has_prefix("\x1b[")
    assert not keymap.has_prefix("\x1bz")


def test_add_duplicate_prefix_raises():
    keymap = KeyMap()
    keymap.add("ab", "yank")
    with pytest.raises(BindingError):
        keymap.add("a", "yank")
    with pytest.raises(BindingError):
        keymap.add("ab", "abort")


def test_add_unknown_function_raises():
    keymap = KeyMap()
    with pytest.raises(BindingError):
        keymap.add("x", "frobnicate")
    assert len(keymap) == 0


def test_remove_returns_binding():
    keymap = KeyMap()
    keymap.add("q", "yank")
    removed = keymap.remove("q")
    assert isinstance(removed, KeyBinding)
    assert removed.function == FunctionSpec("yank")
    assert keymap.find("q") is None
    assert keymap.remove("q") is None


def test_bind_prints_existing_binding():
    keymap = default_keymap()
    assert keymap.bind("^G") == ["^G = abort"]


def test_bind_unbound_key_reports_auto_insert():
    keymap = default_keymap()
    assert keymap.bind("q") == ["q = auto-insert"]


def test_bind_list_functions():
    keymap = default_keymap()
    assert keymap.bind(list_functions=True) == function_names()


def test_bind_sets_and_clears_function():
    keymap = KeyMap()
    assert keymap.bind("^Q", "yank") == []
    assert keymap.find(ctrl("Q")).function.name == "yank"
    keymap.bind("^Q", "abort")
    assert keymap.find(ctrl("Q")).function.name == "abort"
    assert len(keymap) == 1
    keymap.bind("^Q", "")
    assert keymap.find(ctrl("Q")) is None


def test_bind_macro_round_trip():
    keymap = KeyMap()
    keymap.bind("^Q", "ls^J", macro=True)
    binding = keymap.find(ctrl("Q"))
    assert binding.function.name == "macro-string"
    assert binding.macro == "ls\n"
    assert keymap.bind("^Q") == ["^Q = 'ls^J'"]


def test_bind_unknown_function_raises():
    keymap = KeyMap()
    with pytest.raises(BindingError, match="no such function"):
        keymap.bind("^Q", "frobnicate")


def test_bind_without_tty_raises():
    keymap = KeyMap()
    keymap.tty = False
    with pytest.raises(BindingError):
        keymap.bind("^Q", "yank")


def test_bind_all_lists_every_bindable_entry():
    keymap = KeyMap()
    keymap.add("a", "yank")
    keymap.add("b", "set-arg")
    assert keymap.bind() == ["a = yank"]


def test_add_tty_keys_skips_taken_sequences():
    keymap = default_keymap()
    before = len(keymap)
    chars = EditChars(erase=0x7F, kill=0x15, werase=0x17, intr=0x03, quit=0x1C, eof=0x04)
    keymap.add_tty_keys(chars)
    assert keymap.find(chr(0x15)).function.name == "kill-line"
    assert keymap.find(chr(0x03)).function.name == "abort"
    assert keymap.find(chr(0x1C)).function.name == "no-op"
    assert keymap.find(chr(0x7F)).function.name == "delete-char-backward"
    assert len(keymap) == before + 3


def test_add_tty_keys_ignores_disabled():
    keymap = KeyMap()
    keymap.add_tty_keys(EditChars(erase=-1, kill=-1, werase=-1, intr=-1, quit=-1))
    assert len(keymap) == 0