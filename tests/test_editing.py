import pytest

from kornshell.editing import (
    BufferFullError,
    EditChars,
    WordLocation,
    add_glob,
    basename_offset,
    escape_word,
    expansion_display_names,
    locate_word,
    longest_prefix,
    sort_command_matches,
    toggle_comment,
)


@pytest.mark.parametrize(
    "path, expected",
    [("/etc", 1), ("/etc/", 1), ("/etc//", 1), ("/etc/fo", 5), ("foo", 0), ("", 0)],
)
def test_basename_offset_documented_cases(path, expected):
    assert basename_offset(path) == expected


def test_toggle_comment_empty_submits():
    assert toggle_comment("", 100) == ("", True)


def test_toggle_comment_adds_hash():
    text = "echo hi"
    new, submit = toggle_comment(text, 100)
    assert new == "#" + text
    assert submit is True


def test_toggle_comment_round_trip_multiline():
    text = "echo a\necho b\necho c"
    commented, submit = toggle_comment(text, 100)
    assert submit is True
    assert all(line.startswith("#") for line in commented.split("\n"))
    restored, submit2 = toggle_comment(commented, 100)
    assert restored == text
    assert submit2 is False


def test_toggle_comment_no_room():
    with pytest.raises(BufferFullError):
        toggle_comment("abc", 4)


def test_longest_prefix_invariant():
    words = ["foobar", "foobaz", "foob"]
    n = longest_prefix(words)
    assert all(w.startswith(words[0][:n]) for w in words)
    assert not all(w.startswith(words[0][: n + 1]) for w in words)


def test_longest_prefix_empty_and_single():
    assert longest_prefix([]) == 0
    assert longest_prefix(["hello"]) == len("hello")


def test_add_glob_appends_star():
    assert add_glob("foo") == "foo*"
    assert add_glob("~user/dir") == "~user/dir*"


@pytest.mark.parametrize("word", ["f*o", "a?b", "x[ab]", "$HOME", "@(a)", "~user"])
def test_add_glob_leaves_pattern(word):
    assert add_glob(word) == word


def test_add_glob_escaped_star_still_gets_star():
    assert add_glob("a\\*") == "a\\**"


def test_locate_word_argument():
    buf = "ls foo"
    loc = locate_word(buf, len(buf))
    assert buf[loc.start:loc.end] == "foo"
    assert loc.is_command is False
    assert loc.length == len("foo")


def test_locate_word_command():
    buf = "ls foo"
    loc = locate_word(buf, 2)
    assert buf[loc.start:loc.end] == "ls"
    assert loc.is_command is True


def test_locate_word_after_pipe_is_command():
    buf = "echo x | gr"
    loc = locate_word(buf, len(buf))
    assert buf[loc.start:loc.end] == "gr"
    assert loc.is_command is True


def test_locate_word_path_not_command():
    buf = "/bin/l"
    loc = locate_word(buf, len(buf))
    assert buf[loc.start:loc.end] == buf
    assert loc.is_command is False


def test_locate_word_out_of_range():
    assert locate_word("abc", 10) == WordLocation(10, 10, False)


def test_escape_word():
    assert escape_word("plain") == "plain"
    assert escape_word("a b", " ") == "a\\ b"
    assert escape_word("x$y", " ") == "x\\$y"


def test_escape_word_round_trip_length():
    word = "a(b)c;d"
    escaped = escape_word(word, "")
    assert escaped.replace("\\", "") == word
    assert escaped.count("\\") == 3


def test_expansion_display_names_same_dir():
    words = ["/usr/bin/foo", "/usr/bin/fob"]
    assert expansion_display_names(words, False) == ["foo", "fob"]


def test_expansion_display_names_single():
    assert expansion_display_names(["/usr/bin/foo"], False) == ["foo"]


def test_expansion_display_names_command_unchanged():
    words = ["/usr/bin/foo", "/usr/bin/fob"]
    assert expansion_display_names(words, True) == words


def test_sort_command_matches_dedup():
    assert sort_command_matches(["ls", "cat", "ls"], False) == ["cat", "ls"]


def test_sort_command_matches_full_path():
    words = ["/bin/ls", "/bin/cat", "/usr/bin/ls"]
    assert sort_command_matches(words, True) == ["/bin/cat", "/bin/ls", "/usr/bin/ls"]


def test_sort_command_matches_empty():
    assert sort_command_matches([], True) == []
    assert sort_command_matches([], False) == []


def test_edit_chars_defaults():
    chars = EditChars()
    assert chars.werase == 0o27
    assert (chars.erase, chars.kill, chars.intr, chars.quit, chars.eof) == (-2,) * 5