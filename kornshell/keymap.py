"""Key bindings for the emacs-style line editor."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from kornshell.editing import EditChars


class BindingError(Exception):
    """Raised when a key binding cannot be made or shown."""


@dataclass(frozen=True)
class FunctionSpec:
    """An editing function that keys can be bound to."""

    name: str
    takes_arg: bool = False
    bindable: bool = True


@dataclass
class KeyBinding:
    """A key sequence bound to an editing function, or to a macro string."""

    seq: str
    function: FunctionSpec
    macro: str | None = None

    def describe(self) -> str | None:
        """The line ``bind`` prints for this binding, if any."""
        if self.function.bindable:
            return f"{decode_keys(self.seq)} = {self.function.name}"
        if self.macro:
            return f"{decode_keys(self.seq)} = '{decode_keys(self.macro)}'"
        return None


_FUNCTIONS: tuple[FunctionSpec, ...] = (
    FunctionSpec("abort"),
    FunctionSpec("beginning-of-history"),
    FunctionSpec("clear-screen"),
    FunctionSpec("complete-command"),
    FunctionSpec("complete-file"),
    FunctionSpec("complete"),
    FunctionSpec("delete-char-backward", takes_arg=True),
    FunctionSpec("delete-word-backward", takes_arg=True),
    FunctionSpec("delete-char-forward", takes_arg=True),
    FunctionSpec("delete-word-forward", takes_arg=True),
    FunctionSpec("kill-line"),
    FunctionSpec("redraw"),
    FunctionSpec("end-of-history"),
    FunctionSpec("eot"),
    FunctionSpec("list"),
    FunctionSpec("eot-or-delete", takes_arg=True),
    FunctionSpec("error"),
    FunctionSpec("goto-history", takes_arg=True),
    FunctionSpec("macro-string", bindable=False),
    FunctionSpec("auto-insert", takes_arg=True),
    FunctionSpec("kill-to-eol", takes_arg=True),
    FunctionSpec("kill-region"),
    FunctionSpec("list-command"),
    FunctionSpec("list-file"),
    FunctionSpec("quote"),
    FunctionSpec("yank-pop"),
    FunctionSpec("backward-char", takes_arg=True),
    FunctionSpec("beginning-of-line"),
    FunctionSpec("backward-word", takes_arg=True),
    FunctionSpec("end-of-line"),
    FunctionSpec("forward-char", takes_arg=True),
    FunctionSpec("forward-word", takes_arg=True),
    FunctionSpec("newline"),
    FunctionSpec("down-history", takes_arg=True),
    FunctionSpec("newline-and-next"),
    FunctionSpec("no-op"),
    FunctionSpec("up-history", takes_arg=True),
    FunctionSpec("prev-hist-word", takes_arg=True),
    FunctionSpec("search-character-forward", takes_arg=True),
    FunctionSpec("search-character-backward", takes_arg=True),
    FunctionSpec("search-history"),
    FunctionSpec("set-mark-command"),
    FunctionSpec("transpose-chars"),
    FunctionSpec("exchange-point-and-mark"),
    FunctionSpec("yank"),
    FunctionSpec("complete-list"),
    FunctionSpec("expand-file"),
    FunctionSpec("capitalize-word", takes_arg=True),
    FunctionSpec("downcase-word", takes_arg=True),
    FunctionSpec("upcase-word", takes_arg=True),
    FunctionSpec("set-arg", bindable=False),
    FunctionSpec("comment"),
)

_BY_NAME = {spec.name: spec for spec in _FUNCTIONS}

MACRO_FUNCTION = "macro-string"


def ctrl(c: str) -> str:
    """The control character for ``c`` (``?`` gives DEL)."""
    if c == "?":
        return "\x7f"
    return chr(ord(c) & 0x1F)


def unctrl(c: str) -> str:
    """The printable character that names control character ``c``."""
    if c == "\x7f":
        return "?"
    return chr(ord(c) | 0x40)


def _is_control(c: str) -> bool:
    code = ord(c)
    return code < 0x20 or code == 0x7F


def encode_keys(s: str) -> str:
    """Turn ``^X`` notation into the control characters it names."""
    out = []
    i = 0
    n = len(s)
    while i < n:
        ch = s[i]
        if ch == "^" and i + 1 < n and "?" <= s[i + 1] <= "\x7f":
            out.append(ctrl(s[i + 1]))
            i += 2
        else:
            out.append(ch)
            i += 1
    return "".join(out)


def decode_keys(s: str) -> str:
    """Show control characters in ``^X`` notation."""
    return "".join("^" + unctrl(ch) if _is_control(ch) else ch for ch in s)


def function_names() -> list[str]:
    """Names of the functions keys may be bound to, in table order."""
    return [spec.name for spec in _FUNCTIONS if spec.bindable]


def _lookup(function: str | FunctionSpec) -> FunctionSpec:
    name = function.name if isinstance(function, FunctionSpec) else function
    try:
        return _BY_NAME[name]
    except KeyError:
        raise BindingError(f"{name}: no such function") from None


class KeyMap:
    """An ordered list of key bindings."""

    def __init__(self) -> None:
        self.bindings: list[KeyBinding] = []
        self.tty = True

    def __iter__(self) -> Iterator[KeyBinding]:
        return iter(self.bindings)

    def __len__(self) -> int:
        return len(self.bindings)

    def add(
        self, seq: str, function: str | FunctionSpec, macro: str | None = None
    ) -> KeyBinding:
        """Bind ``seq``; refuse if it is a prefix of an existing binding."""
        spec = _lookup(function)
        if self.has_prefix(seq):
            raise BindingError(f"duplicate binding for {decode_keys(seq)}")
        binding = KeyBinding(seq, spec, macro)
        self.bindings.append(binding)
        return binding

    def remove(self, seq: str) -> KeyBinding | None:
        """Remove the binding for exactly ``seq`` and return it."""
        for i, binding in enumerate(self.bindings):
            if binding.seq == seq:
                return self.bindings.pop(i)
        return None

    def find(self, seq: str) -> KeyBinding | None:
        """The binding for exactly ``seq``, if any."""
        return next((b for b in self.bindings if b.seq == seq), None)

    def has_prefix(self, seq: str) -> bool:
        """Whether some binding's sequence starts with ``seq``."""
        return any(b.seq.startswith(seq) for b in self.bindings)

    def match(self, seq: str) -> tuple[KeyBinding | None, bool]:
        """Match typed keys against the bindings.

        Returns the binding to run, if the keys select exactly one, and
        whether more keys could still complete a binding.
        """
        submatch = 0
        found: KeyBinding | None = None
        for binding in self.bindings:
            if len(seq) > len(binding.seq):
                continue
            if binding.seq.startswith(seq):
                submatch += 1
                if len(binding.seq) == len(seq):
                    found = binding
            if submatch > 1:
                break
        if submatch == 1 and found is not None:
            return found, False
        return None, submatch > 0

    def bind(
        self,
        keys: str | None = None,
        value: str | None = None,
        macro: bool = False,
        list_functions: bool = False,
    ) -> list[str]:
        """Carry out the ``bind`` command and return the lines it prints."""
        if not self.tty:
            raise BindingError("cannot bind, not a tty")

        if list_functions:
            return function_names()

        if keys is None:
            return [line for b in self.bindings if (line := b.describe())]

        seq = encode_keys(keys)
        if value is None:
            binding = self.find(seq)
            if binding is not None:
                line = binding.describe()
                return [line] if line else []
            return [f"{decode_keys(keys)} = auto-insert"]

        if value == "":
            self.remove(seq)
            return []

        if macro:
            self.remove(seq)
            self.add(seq, MACRO_FUNCTION, encode_keys(value))
            return []

        spec = _lookup(value)
        self.remove(seq)
        self.add(seq, spec)
        return []

    def add_tty_keys(self, chars: EditChars) -> None:
        """Bind the terminal's editing characters, skipping ones already taken."""
        esc = ctrl("[")
        wanted: list[tuple[str, str]] = []
        if chars.erase >= 0:
            wanted.append((chr(chars.erase), "delete-char-backward"))
            wanted.append((esc + chr(chars.erase), "delete-word-backward"))
        if chars.kill >= 0:
            wanted.append((chr(chars.kill), "kill-line"))
        if chars.werase >= 0:
            wanted.append((chr(chars.werase), "delete-word-backward"))
        if chars.intr >= 0:
            wanted.append((chr(chars.intr), "abort"))
        if chars.quit >= 0:
            wanted.append((chr(chars.quit), "no-op"))
        for seq, name in wanted:
            try:
                self.add(seq, name)
            except BindingError:
                pass


def _c(ch: str) -> str:
    return ctrl(ch)


_ESC = "\x1b"

_DEFAULT_BINDINGS: tuple[tuple[str, str], ...] = (
    ("abort", _c("G")),
    ("backward-char", _c("B")),
    ("backward-char", _c("X") + _c("D")),
    ("backward-word", _ESC + "b"),
    ("beginning-of-history", _ESC + "<"),
    ("beginning-of-line", _c("A")),
    ("capitalize-word", _ESC + "C"),
    ("capitalize-word", _ESC + "c"),
    ("comment", _ESC + "#"),
    ("complete", _ESC + _ESC),
    ("complete-command", _c("X") + _ESC),
    ("complete-file", _ESC + _c("X")),
    ("complete-list", _c("I")),
    ("complete-list", _ESC + "="),
    ("delete-char-backward", _c("?")),
    ("delete-char-backward", _c("H")),
    ("delete-char-forward", _ESC + "[3~"),
    ("delete-word-backward", _c("W")),
    ("delete-word-backward", _ESC + _c("?")),
    ("delete-word-backward", _ESC + _c("H")),
    ("delete-word-backward", _ESC + "h"),
    ("delete-word-forward", _ESC + "d"),
    ("down-history", _c("N")),
    ("down-history", _c("X") + "B"),
    ("downcase-word", _ESC + "L"),
    ("downcase-word", _ESC + "l"),
    ("end-of-history", _ESC + ">"),
    ("end-of-line", _c("E")),
    ("eot", _c("_")),
    ("eot-or-delete", _c("D")),
    ("exchange-point-and-mark", _c("X") + _c("X")),
    ("expand-file", _ESC + "*"),
    ("forward-char", _c("F")),
    ("forward-char", _c("X") + "C"),
    ("forward-word", _ESC + "f"),
    ("goto-history", _ESC + "g"),
    ("kill-to-eol", _c("K")),
    ("list", _ESC + "?"),
    ("list-command", _c("X") + "?"),
    ("list-file", _c("X") + _c("Y")),
    ("newline", _c("J")),
    ("newline", _c("M")),
    ("newline-and-next", _c("O")),
    ("prev-hist-word", _ESC + "."),
    ("prev-hist-word", _ESC + "_"),
    ("quote", _c("^")),
    ("clear-screen", _c("L")),
    ("search-character-backward", _ESC + _c("]")),
    ("search-character-forward", _c("]")),
    ("search-history", _c("R")),
    ("set-mark-command", _ESC + " "),
    ("transpose-chars", _c("T")),
    ("up-history", _c("P")),
    ("up-history", _c("X") + "A"),
    ("upcase-word", _ESC + "U"),
    ("upcase-word", _ESC + "u"),
    ("quote", _c("V")),
    ("yank", _c("Y")),
    ("yank-pop", _ESC + "y"),
    # arrow keys
    ("up-history", _ESC + "[A"),
    ("down-history", _ESC + "[B"),
    ("forward-char", _ESC + "[C"),
    ("backward-char", _ESC + "[D"),
    ("up-history", _ESC + "OA"),
    ("down-history", _ESC + "OB"),
    ("forward-char", _ESC + "OC"),
    ("backward-char", _ESC + "OD"),
    # home and end
    ("beginning-of-line", _ESC + "[H"),
    ("end-of-line", _ESC + "[F"),
    ("beginning-of-line", _ESC + "OH"),
    ("end-of-line", _ESC + "OF"),
    ("beginning-of-line", _ESC + "[1~"),
    ("end-of-line", _ESC + "[4~"),
    ("beginning-of-line", _ESC + "[7~"),
    ("end-of-line", _ESC + "[8~"),
    # numeric arguments; these cannot be rebound by name
    *(("set-arg", _ESC + digit) for digit in "0123456789"),
    # control-arrow keys
    ("end-of-line", _ESC + "[1;5A"),
    ("beginning-of-line", _ESC + "[1;5B"),
    ("forward-word", _ESC + "[1;5C"),
    ("backward-word", _ESC + "[1;5D"),
)


def default_keymap() -> KeyMap:
    """The standard emacs-mode bindings."""
    keymap = KeyMap()
    for name, seq in _DEFAULT_BINDINGS:
        keymap.add(seq, name)
    return keymap