"""Helpers for the Bourne built-ins: ``true``/``false``, ``umask`` and ``times``."""

from __future__ import annotations

import resource

_OCTAL_DIGITS = frozenset("01234567")
_WHO = {"a": 0o111, "u": 0o100, "g": 0o010, "o": 0o001}
_OPS = frozenset("=+-")
_PERM_CHARS = frozenset("rwxugoXs")


class UmaskError(ValueError):
    """Raised when a umask specification cannot be parsed."""


def label_status(name: str) -> int:
    """Exit status of ``:``, ``true`` and ``false``: 1 only for ``false``."""
    return 1 if name.startswith("f") else 0


def _parse_octal(spec: str) -> int:
    value = 0
    i = 0
    while i < len(spec) and spec[i] in _OCTAL_DIGITS:
        value = value * 8 + int(spec[i])
        i += 1
    if i < len(spec):
        raise UmaskError("bad number")
    return value


def parse_umask(spec: str, current: int) -> int:
    """The new umask that ``umask spec`` sets when the current one is ``current``.

    ``spec`` is either an octal number or a symbolic mode such as
    ``u=rwx,go-w``; symbolic modes describe the permissions to allow.
    """
    if spec[:1].isdigit():
        return _parse_octal(spec)

    old = ~current & 0o777
    new = old
    positions = 0
    i = 0
    n = len(spec)
    while i < n:
        while i < n and spec[i] in _WHO:
            positions |= _WHO[spec[i]]
            i += 1
        if not positions:
            positions = 0o111
        if i >= n or spec[i] not in _OPS:
            break
        op = spec[i]
        i += 1
        new_val = 0
        while i < n and spec[i] in _PERM_CHARS:
            ch = spec[i]
            i += 1
            if ch == "r":
                new_val |= 0o4
            elif ch == "w":
                new_val |= 0o2
            elif ch == "x":
                new_val |= 0o1
            elif ch == "u":
                new_val |= old >> 6
            elif ch == "g":
                new_val |= old >> 3
            elif ch == "o":
                new_val |= old
            elif ch == "X":
                if old & 0o111:
                    new_val |= 0o1
            # 's' is accepted and ignored
        new_val = (new_val & 0o7) * positions
        if op == "-":
            new &= ~new_val
        elif op == "=":
            new = new_val | (new & ~(positions * 0o7))
        else:
            new |= new_val
        if i < n and spec[i] == ",":
            positions = 0
            i += 1
        elif i >= n or spec[i] not in _OPS:
            break
    if i < n:
        raise UmaskError("bad mask")
    return ~new & 0o777


def format_umask(mask: int, symbolic: bool = False) -> str:
    """How ``umask`` (or ``umask -S``) shows ``mask``."""
    if not symbolic:
        text = format(mask, "03o")
        return text if text.startswith("0") else "0" + text
    allowed = ~mask
    groups = []
    for i, who in enumerate("ugo"):
        letters = "".join(
            perm for j, perm in enumerate("rwx") if allowed & (1 << (8 - (3 * i + j)))
        )
        groups.append(f"{who}={letters}")
    return ",".join(groups)


def format_time(
    seconds: int,
    fraction: int,
    posix: bool = False,
    width: int = 0,
    prefix: str | None = None,
    suffix: str = "",
) -> str:
    """Format a duration of ``seconds`` plus ``fraction`` hundredths.

    The POSIX form is ``S.FF``; otherwise ``MmSS.FFs``.
    """
    lead = prefix or ""
    if posix:
        return f"{lead}{seconds:>{width}}.{fraction:02d}{suffix}"
    minutes, secs = divmod(seconds, 60)
    return f"{lead}{minutes:>{width}}m{secs:02d}.{fraction:02d}s{suffix}"


def _split(value: float) -> tuple[int, int]:
    micros = round(value * 1_000_000)
    secs, usec = divmod(micros, 1_000_000)
    return secs, usec // 10_000


def times_report() -> str:
    """What ``times`` prints: user and system time of the shell, then of its children."""
    lines = []
    for who in (resource.RUSAGE_SELF, resource.RUSAGE_CHILDREN):
        usage = resource.getrusage(who)
        lines.append(
            format_time(*_split(usage.ru_utime), suffix=" ")
            + format_time(*_split(usage.ru_stime), suffix="\n")
        )
    return "".join(lines)