"""Editing helpers shared by the line editors: comments, completion and quoting."""

from __future__ import annotations

from dataclasses import dataclass

BEL = 0x07

# Completion flags.
XCF_COMMAND = 1 << 0
XCF_FILE = 1 << 1
XCF_FULLPATH = 1 << 2
XCF_COMMAND_FILE = XCF_COMMAND | XCF_FILE

# Characters that end a word for completion purposes.
_WORD_BREAKS = frozenset(" \t\n|&;<>()'\"`=:\0")
# Characters that may precede a command word.
_COMMAND_SEPARATORS = frozenset(";|&()`")
# Characters that must be escaped when inserted into the edit buffer.
_ESCAPE_CHARS = frozenset("!\"#$&'()*:;<=>?[\\]`{|}")
_SPACE = frozenset(" \t\n\v\f\r")


class BufferFullError(Exception):
    """Raised when the edit buffer has no room for a change."""


@dataclass
class EditChars:
    """Terminal driver characters the editor is interested in.

    -2 forces an initial binding; -1 means the character is disabled.
    """

    erase: int = -2
    kill: int = -2
    werase: int = 0o27
    intr: int = -2
    quit: int = -2
    eof: int = -2


@dataclass(frozen=True)
class WordLocation:
    """Position of the word under the cursor."""

    start: int
    end: int
    is_command: bool

    @property
    def length(self) -> int:
        return self.end - self.start


def toggle_comment(text: str, size: int) -> tuple[str, bool]:
    """Comment or uncomment an edit line.

    Returns the new text and whether the line should now be submitted
    (True when a comment was added). Raises BufferFullError when the
    comment characters do not fit in a buffer of ``size``.
    """
    if not text:
        return text, True

    if text[0] == "#":
        kept = []
        saw_nl = False
        for ch in text[1:]:
            if not saw_nl or ch != "#":
                kept.append(ch)
            saw_nl = ch == "\n"
        return "".join(kept), False

    needed = text.count("\n") + 1
    if len(text) + needed >= size:
        raise BufferFullError("not enough room for comment characters")
    return "#" + text.replace("\n", "\n#"), True


def longest_prefix(words: list[str]) -> int:
    """Length of the longest prefix shared by all words."""
    if not words:
        return 0
    first = words[0]
    prefix_len = len(first)
    for word in words[1:]:
        for j in range(prefix_len):
            if j >= len(word) or word[j] != first[j]:
                prefix_len = j
                break
    return prefix_len


def basename_offset(path: str) -> int:
    """Offset of the basename in ``path``, ignoring trailing slashes."""
    if not path:
        return 0
    p = len(path) - 1
    while p > 0 and path[p] == "/":
        p -= 1
    while p > 0 and path[p] != "/":
        p -= 1
    if path[p] == "/" and p + 1 < len(path):
        p += 1
    return p


def add_glob(word: str) -> str:
    """Append ``*`` to a word unless it already globs or names ``~user``."""
    saw_slash = False
    i = 0
    n = len(word)
    while i < n:
        ch = word[i]
        nxt = word[i + 1] if i + 1 < n else ""
        if ch == "\\" and nxt:
            i += 2
            continue
        if ch in "*[?$" or (nxt == "(" and ch in "+@!"):
            return word
        if ch == "/":
            saw_slash = True
        i += 1
    if not word.startswith("~") or saw_slash:
        return word + "*"
    return word


def _is_word_char(ch: str) -> bool:
    return ch not in _WORD_BREAKS


def locate_word(buf: str, pos: int) -> WordLocation:
    """Find the word around ``pos`` and whether it is in command position."""
    n = len(buf)
    if pos < 0 or pos > n:
        return WordLocation(pos, pos, False)

    start = pos
    while (start > 0 and _is_word_char(buf[start - 1])) or (
        start > 1 and buf[start - 2] == "\\"
    ):
        start -= 1

    end = start
    while end < n and _is_word_char(buf[end]):
        if buf[end] == "\\" and end + 1 < n:
            end += 1
        end += 1

    before = buf[:start].rstrip("".join(_SPACE))
    is_command = not before or before[-1] in _COMMAND_SEPARATORS
    if is_command:
        # A command containing a slash is completed like a file name.
        is_command = "/" not in buf[start:end]
    return WordLocation(start, end, is_command)


def escape_word(word: str, ifs: str = " \t\n") -> str:
    """Backslash-escape shell metacharacters and IFS characters in a word."""
    return "".join(
        "\\" + ch if ch in _ESCAPE_CHARS or ch in ifs else ch for ch in word
    )


def expansion_display_names(words: list[str], is_command: bool) -> list[str]:
    """Names to show when listing completions.

    When every file match lives in the same directory, the directory part
    is dropped.
    """
    if is_command:
        return list(words)
    prefix_len = longest_prefix(words)
    if prefix_len <= 0:
        return list(words)
    if len(words) == 1:
        prefix_len = basename_offset(words[0])
    if any(basename_offset(w[prefix_len:]) > prefix_len for w in words):
        return list(words)
    first = words[0]
    while prefix_len > 0 and first[prefix_len - 1] != "/":
        prefix_len -= 1
    return [w[prefix_len:] for w in words]


def sort_command_matches(words: list[str], full_path: bool) -> list[str]:
    """Order command completion matches.

    With ``full_path`` the matches are sorted by basename and then by the
    order of their directories; otherwise they are sorted and duplicates
    removed.
    """
    if not full_path:
        result: list[str] = []
        for word in sorted(words):
            if not result or result[-1] != word:
                result.append(word)
        return result

    keyed = []
    path_order = 0
    last_word: str | None = None
    last_base = -1
    for word in words:
        base = basename_offset(word)
        if last_word is None or base != last_base or word[:base] != last_word[:base]:
            last_word, last_base = word, base
            path_order += 1
        keyed.append((word[base:], path_order, word))
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [word for _, _, word in keyed]