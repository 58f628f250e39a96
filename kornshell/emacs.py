"""The emacs-style edit line: cursor motion, deletion, the kill ring and history search.

Display handling is left to the caller. Editing methods return True when the
command was carried out and False when the editor would ring the bell.
"""

from __future__ import annotations

from collections.abc import Sequence

from kornshell.editing import toggle_comment

LINE = 4096
KILLSIZE = 20

# Separators used when picking words out of a history line.
_COMPLETION_SEPARATORS = frozenset(" \t\"'")


def _is_motion_separator(c: str) -> bool:
    """Whether ``c`` separates words for motion and case folding."""
    if c == "_" or c == "$" or ord(c) >= 0x80:
        return False
    return not (c.isascii() and c.isalnum())


def _is_completion_separator(c: str) -> bool:
    return c in _COMPLETION_SEPARATORS


def match_pattern(line: str, pattern: str) -> int:
    """Position of the first match of ``pattern`` in ``line``, or -1.

    A leading ``^`` anchors the pattern at the start of the line.
    """
    if pattern.startswith("^"):
        return 0 if line.startswith(pattern[1:]) else -1
    return line.find(pattern)


def search_history(
    history: Sequence[str], pattern: str, start: int
) -> tuple[int, int] | None:
    """Search history backwards from index ``start`` (inclusive).

    Returns the index of the matching entry and the offset of the match in
    it, or None when nothing matches.
    """
    for index in range(min(start, len(history) - 1), -1, -1):
        offset = match_pattern(history[index], pattern)
        if offset >= 0:
            return index, offset
    return None


def utf8_sequence_length(first: int) -> int:
    """Number of bytes in the UTF-8 sequence that begins with byte ``first``.

    Invalid or overlong lead bytes count as single bytes.
    """
    if (first & 0xF8) == 0xF0 and first < 0xF5:
        return 4
    if (first & 0xF0) == 0xE0:
        return 3
    if (first & 0xE0) == 0xC0 and first > 0xC1:
        return 2
    return 1


class KillRing:
    """A fixed-size ring of killed text."""

    def __init__(self, size: int = KILLSIZE) -> None:
        if size <= 0:
            raise ValueError("kill ring size must be positive")
        self.size = size
        self.entries: list[str | None] = [None] * size
        self.sp = 0
        self.top = 0

    @property
    def current(self) -> str | None:
        """The entry the last yank or rotation selected."""
        return self.entries[self.top]

    def push(self, text: str) -> None:
        """Store killed text, replacing the oldest entry when full."""
        self.entries[self.sp] = text
        self.sp = (self.sp + 1) % self.size

    def yank(self) -> str | None:
        """The most recently killed text, or None if nothing was killed."""
        self.top = (self.sp - 1) % self.size
        return self.entries[self.top]

    def rotate(self) -> str | None:
        """Step back to the previous killed text and return it."""
        if all(entry is None for entry in self.entries):
            return None
        while True:
            self.top = (self.top - 1) % self.size
            if self.entries[self.top] is not None:
                return self.entries[self.top]


class EmacsLine:
    """The text being edited, with a cursor, a mark and a kill ring."""

    def __init__(self, text: str = "", size: int = LINE) -> None:
        self.text = text
        self.size = size
        self.cursor = len(text)
        self.mark: int | None = None
        self.kill_ring = KillRing()
        self._yanked = False

    # -- internal helpers -------------------------------------------------

    def _insert_text(self, s: str) -> bool:
        if len(self.text) + len(s) >= self.size:
            return False
        self.text = self.text[: self.cursor] + s + self.text[self.cursor :]
        self.cursor += len(s)
        return True

    def _delete(self, count: int, push: bool) -> None:
        if count == 0:
            return
        if self.mark is not None and self.mark > self.cursor:
            if self.cursor + count > self.mark:
                self.mark = self.cursor
            else:
                self.mark -= count
        removed = self.text[self.cursor : self.cursor + count]
        if push:
            self.kill_ring.push(removed)
        self.text = self.text[: self.cursor] + self.text[self.cursor + count :]

    def _word_back(self, count: int) -> int:
        """Move back ``count`` words; return characters passed, or -1."""
        if self.cursor == 0:
            return -1
        cp = self.cursor
        for _ in range(count):
            while cp > 0 and _is_motion_separator(self.text[cp - 1]):
                cp -= 1
            while cp > 0 and not _is_motion_separator(self.text[cp - 1]):
                cp -= 1
        moved = self.cursor - cp
        self.cursor = cp
        return moved

    def _word_forward(self, count: int) -> int:
        """Characters spanned by the next ``count`` words, or -1."""
        end = len(self.text)
        if self.cursor == end:
            return -1
        cp = self.cursor
        for _ in range(count):
            while cp != end and _is_motion_separator(self.text[cp]):
                cp += 1
            while cp != end and not _is_motion_separator(self.text[cp]):
                cp += 1
        return cp - self.cursor

    # -- insertion and motion --------------------------------------------

    def insert(self, s: str, count: int = 1) -> bool:
        """Insert ``s`` at the cursor ``count`` times."""
        self._yanked = False
        if s == "\0":
            return False
        for _ in range(count):
            if not self._insert_text(s):
                return False
        return True

    def move_back(self, count: int = 1) -> bool:
        self._yanked = False
        if self.cursor == 0:
            return False
        self.cursor -= min(count, self.cursor)
        return True

    def move_forward(self, count: int = 1) -> bool:
        self._yanked = False
        left = len(self.text) - self.cursor
        if left == 0:
            return False
        self.cursor += min(count, left)
        return True

    def delete_back(self, count: int = 1) -> bool:
        self._yanked = False
        if self.cursor == 0:
            return False
        n = min(count, self.cursor)
        self.cursor -= n
        self._delete(n, push=False)
        return True

    def delete_forward(self, count: int = 1) -> bool:
        self._yanked = False
        left = len(self.text) - self.cursor
        if left == 0:
            return False
        self._delete(min(count, left), push=False)
        return True

    def backward_word(self, count: int = 1) -> bool:
        self._yanked = False
        return self._word_back(count) >= 0

    def forward_word(self, count: int = 1) -> bool:
        self._yanked = False
        n = self._word_forward(count)
        if n < 0:
            return False
        self.cursor += n
        return True

    def delete_word_backward(self, count: int = 1) -> bool:
        self._yanked = False
        n = self._word_back(count)
        if n < 0:
            return False
        self._delete(n, push=True)
        return True

    def delete_word_forward(self, count: int = 1) -> bool:
        self._yanked = False
        n = self._word_forward(count)
        if n < 0:
            return False
        self._delete(n, push=True)
        return True

    # -- killing and yanking ----------------------------------------------

    def kill_to_eol(self, column: int | None = None) -> bool:
        """Kill to the end of line, or between the cursor and ``column``."""
        self._yanked = False
        last = len(self.text)
        target = last if column is None else min(column, last)
        ndel = target - self.cursor
        if ndel < 0:
            self.cursor = target
            ndel = -ndel
        self._delete(ndel, push=True)
        return True

    def kill_line(self) -> bool:
        """Kill the whole line."""
        self._yanked = False
        self.kill_ring.push(self.text)
        self.text = ""
        self.cursor = 0
        self.mark = None
        return True

    def yank(self) -> bool:
        """Insert the most recently killed text."""
        self._yanked = False
        text = self.kill_ring.yank()
        if text is None:
            return False
        self.mark = self.cursor
        self._insert_text(text)
        self._yanked = True
        return True

    def yank_pop(self) -> bool:
        """Replace just-yanked text with the previous kill."""
        current = self.kill_ring.current
        if not self._yanked or current is None:
            self._yanked = False
            self.kill_ring.top = self.kill_ring.sp
            return False
        length = len(current)
        self.cursor = max(self.cursor - length, 0)
        self._delete(length, push=False)
        text = self.kill_ring.rotate()
        if text is not None:
            self._insert_text(text)
        self._yanked = True
        return True

    # -- transformations ---------------------------------------------------

    def transpose(self, gmacs: bool = False) -> bool:
        """Swap characters around the cursor, GNU emacs or gmacs style."""
        self._yanked = False
        c = self.cursor
        chars = list(self.text)
        if c == 0:
            return False
        if c == len(chars) or gmacs:
            if c == 1:
                return False
            chars[c - 1], chars[c - 2] = chars[c - 2], chars[c - 1]
            self.text = "".join(chars)
        else:
            chars[c - 1], chars[c] = chars[c], chars[c - 1]
            self.text = "".join(chars)
            self.cursor = c + 1
        return True

    def fold_case(self, mode: str, count: int = 1) -> bool:
        """Upper-case ('U'), lower-case ('L') or capitalize ('C') words."""
        self._yanked = False
        if mode not in ("U", "L", "C"):
            raise ValueError(f"unknown case mode: {mode!r}")
        end = len(self.text)
        cp = self.cursor
        if cp == end:
            return False
        chars = list(self.text)

        def fold(ch: str, upper: bool) -> str:
            if not ch.isascii():
                return ch
            return ch.upper() if upper else ch.lower()

        for _ in range(count):
            while cp != end and _is_motion_separator(chars[cp]):
                cp += 1
            if cp != end:
                chars[cp] = fold(chars[cp], mode != "L")
                cp += 1
            while cp != end and not _is_motion_separator(chars[cp]):
                chars[cp] = fold(chars[cp], mode == "U")
                cp += 1
        self.text = "".join(chars)
        self.cursor = cp
        return True

    # -- mark and region ---------------------------------------------------

    def set_mark(self) -> bool:
        self._yanked = False
        self.mark = self.cursor
        return True

    def exchange_point_and_mark(self) -> bool:
        self._yanked = False
        if self.mark is None:
            return False
        target = min(self.mark, len(self.text))
        self.mark = self.cursor
        self.cursor = target
        return True

    def kill_region(self) -> bool:
        """Kill the text between the cursor and the mark."""
        self._yanked = False
        if self.mark is None:
            return False
        mark = min(self.mark, len(self.text))
        if mark > self.cursor:
            size, start = mark - self.cursor, self.cursor
        else:
            size, start = self.cursor - mark, mark
        self.cursor = start
        self._delete(size, push=True)
        self.mark = start
        return True

    # -- character search --------------------------------------------------

    def search_char_forward(self, c: str, count: int = 1) -> bool:
        """Move to the ``count``-th next ``c``, wrapping to the start."""
        self._yanked = False
        if not c:
            return False
        cp = self.cursor
        end = len(self.text)
        for _ in range(count):
            found = -1 if cp == end else self.text.find(c, cp + 1)
            if found < 0:
                found = self.text.find(c)
            if found < 0:
                return False
            cp = found
        self.cursor = cp
        return True

    def search_char_backward(self, c: str, count: int = 1) -> bool:
        """Move to the ``count``-th previous ``c``, wrapping to the end."""
        self._yanked = False
        if not c:
            return False
        end = len(self.text)
        cp = self.cursor
        for _ in range(count):
            p = cp
            while True:
                p = end if p == 0 else p - 1
                if p == cp:
                    return False
                if p < end and self.text[p] == c:
                    break
            cp = p
        self.cursor = cp
        return True

    # -- history and comments ----------------------------------------------

    def insert_history_word(self, line: str | None, index: int | None = None) -> bool:
        """Insert a word of a history line: the last one, or the ``index``-th."""
        self._yanked = False
        if not line:
            return False
        if index is None:
            r = len(line) - 1
            while r > 0 and _is_completion_separator(line[r]):
                r -= 1
            while r > 0 and not _is_completion_separator(line[r]):
                r -= 1
            if _is_completion_separator(line[r]):
                r += 1
            return self._insert_text(line[r:])
        n = len(line)
        r = 0
        while r < n and _is_completion_separator(line[r]):
            r += 1
        for _ in range(index - 1):
            while r < n and not _is_completion_separator(line[r]):
                r += 1
            while r < n and _is_completion_separator(line[r]):
                r += 1
        start = r
        while r < n and not _is_completion_separator(line[r]):
            r += 1
        return self._insert_text(line[start:r])

    def comment(self) -> bool:
        """Comment or uncomment the line; True when it should be submitted.

        Raises BufferFullError when the comment characters do not fit.
        """
        self._yanked = False
        text, submit = toggle_comment(self.text, self.size)
        self.text = text
        self.cursor = 0
        return submit