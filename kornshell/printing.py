"""Argument handling and output formatting for ``echo``, ``print`` and ``cd``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

_SIMPLE_ESCAPES = {
    "a": "\x07",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\x0b",
}
_OCTAL_DIGITS = frozenset("01234567")


class BuiltinError(Exception):
    """Raised when a built-in command cannot do what it was asked."""


@dataclass
class EchoOptions:
    """Output settings chosen by ``echo`` options."""

    newline: bool = True
    expand: bool = True


def expand_escapes(text: str) -> tuple[str, bool]:
    """Expand backslash sequences in ``text``.

    Returns the expanded text and whether a ``\\c`` asked for the trailing
    newline to be left off.
    """
    out: list[str] = []
    suppress_newline = False
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        i += 1
        if ch != "\\":
            out.append(ch)
            continue
        if i >= n:
            out.append("\\")
            continue
        esc = text[i]
        i += 1
        if esc in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[esc])
        elif esc == "c":
            suppress_newline = True
        elif esc == "0":
            value = 0
            for _ in range(3):
                if i < n and text[i] in _OCTAL_DIGITS:
                    value = value * 8 + int(text[i])
                    i += 1
                else:
                    break
            out.append(chr(value & 0xFF))
        elif esc == "\\":
            out.append("\\")
        else:
            out.append("\\" + esc)
    return "".join(out), suppress_newline


def parse_echo_args(
    args: Sequence[str], posix: bool = False
) -> tuple[EchoOptions, list[str]]:
    """Split ``echo`` arguments into options and the words to print.

    ``args`` excludes the command name. In POSIX mode only a leading ``-n``
    is recognised; otherwise any run of arguments made of ``n``, ``e`` and
    ``E`` option letters is taken, and an argument with an unknown letter
    is printed as it is.
    """
    words = list(args)
    options = EchoOptions()
    if posix:
        if words and words[0] == "-n":
            options.newline = False
            words.pop(0)
        return options, words

    pending = EchoOptions(options.newline, options.expand)
    while words and words[0].startswith("-") and len(words[0]) > 1:
        bad = False
        for letter in words[0][1:]:
            if letter == "n":
                pending.newline = False
            elif letter == "e":
                pending.expand = True
            elif letter == "E":
                pending.expand = False
            else:
                bad = True
                break
        if bad:
            break
        words.pop(0)
        options = EchoOptions(pending.newline, pending.expand)
    return options, words


def render_print(
    words: Sequence[str], expand: bool = True, newline: bool = True
) -> str:
    """The text ``print`` or ``echo`` writes for ``words``."""
    parts: list[str] = []
    for word in words:
        if expand:
            text, stop = expand_escapes(word)
            if stop:
                newline = False
            parts.append(text)
        else:
            parts.append(word)
    result = " ".join(parts)
    if newline:
        result += "\n"
    return result


def substitute_directory(cwd: str, old: str, new: str) -> str:
    """Replace the first ``old`` in ``cwd`` with ``new``, as ``cd old new`` does."""
    if not cwd:
        raise BuiltinError("don't know current directory")
    index = cwd.find(old)
    if index < 0:
        raise BuiltinError("bad substitution")
    return cwd[:index] + new + cwd[index + len(old):]