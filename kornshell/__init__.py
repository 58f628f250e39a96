"""Korn shell line editing, key bindings, completion helpers and built-in command logic."""

__version__ = "0.1.0"

__all__ = [
    "builtins_sh",
    "editing",
    "emacs",
    "keymap",
    "printing",
]