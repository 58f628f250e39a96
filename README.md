# kornshell

Pieces of a Korn shell that make sense on their own: the edit buffer and
key bindings of the emacs-style command-line editor, the completion helpers
shared by the editing modes, and the logic behind `echo`, `print`, `cd old
new`, `:`/`true`/`false`, `umask` and `times`.

The package has no dependencies outside the standard library. `times_report`
uses the `resource` module and so needs a POSIX system.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

### `kornshell.editing`

Helpers shared by the line editors.

- `toggle_comment(text, size)` comments a line out (a `#` at the start and
  after each newline) or, when it already starts with `#`, comments it back
  in. It returns the new text and whether the line should now be submitted
  (true when a comment was added, and for an empty line). Raises
  `BufferFullError` if the added characters would not fit in `size`.
- `longest_prefix(words)` gives the length of the prefix all words share;
  `basename_offset(path)` gives the offset of the last path component,
  ignoring trailing slashes.
- `add_glob(word)` turns a word into a glob pattern, appending `*` unless it
  already holds `*`, `?`, `[`, `$` or an extended-glob opener, or is a bare
  `~user`.
- `locate_word(buf, pos)` finds the word around a cursor position and
  returns a `WordLocation` (`start`, `end`, `length`, `is_command`). A word
  is in command position at the start of the line or after one of
  `;|&()` and a backquote, as long as it has no `/`.
- `escape_word(word, ifs)` backslash-escapes shell-special characters and
  characters from `ifs`.
- `expansion_display_names(words, is_command)` drops the shared directory
  part when listing file matches that all live in one directory.
- `sort_command_matches(words, full_path)` sorts command matches, either
  removing duplicates or, with `full_path`, ordering by basename and then by
  the order of their directories.
- `EditChars` holds the terminal's erase, kill, word-erase, interrupt, quit
  and end-of-file characters (-1 for disabled).

### `kornshell.keymap`

Key bindings for emacs mode.

- `ctrl(c)` / `unctrl(c)` convert between a character and its control form
  (`?` stands for DEL).
- `encode_keys(s)` reads `^X` notation into key sequences; `decode_keys(s)`
  writes control characters back in that notation.
- `default_keymap()` returns a `KeyMap` with the standard bindings,
  including arrow, home/end and control-arrow escape sequences and
  `ESC 0`–`ESC 9` for numeric arguments.
- `function_names()` lists the functions a key may be bound to by name;
  `FunctionSpec` describes one and `KeyBinding` pairs it with a sequence
  (and an optional macro string).
- `KeyMap.add`, `remove`, `find` and `has_prefix` manage bindings;
  `add` refuses a sequence that is a prefix of an existing one.
  `KeyMap.match(seq)` returns the binding typed keys select, if exactly one,
  and whether more keys could still complete a binding.
- `KeyMap.bind(keys, value, macro, list_functions)` behaves like the `bind`
  built-in and returns the lines it would print. It raises `BindingError`
  for an unknown function, a duplicate binding, or when `tty` is false.
- `KeyMap.add_tty_keys(chars)` binds the terminal's own editing characters
  from an `EditChars`, quietly skipping any already taken.

### `kornshell.emacs`

`EmacsLine` is the edit buffer behind emacs mode: insertion, character and
word motion and deletion, kill-to-end-of-line, kill-line, yank and yank-pop
through a `KillRing`, transpose (GNU or gmacs style), case folding
(`"U"`, `"L"`, `"C"`), mark and region, character search in either
direction, inserting a word from a history line, and commenting the line.
Editing methods return `False` where the editor would ring the bell; screen
drawing is left to the caller.

`match_pattern(line, pattern)` and `search_history(history, pattern, start)`
implement incremental history search (a leading `^` anchors the pattern).
`utf8_sequence_length(first)` tells how many bytes a UTF-8 sequence has.

### `kornshell.printing`

- `expand_escapes(text)` handles the backslash sequences of `echo` and
  `print` (`\a`, `\b`, `\c`, `\f`, `\n`, `\r`, `\t`, `\v`, `\0nnn`, `\\`)
  and reports whether `\c` was seen.
- `parse_echo_args(args, posix)` reads the `-n`, `-e` and `-E` options the
  way `echo` does and returns `EchoOptions` and the remaining words.
- `render_print(words, expand, newline)` builds the text `print` writes.
- `substitute_directory(cwd, old, new)` is the two-argument form of `cd`;
  it raises `BuiltinError` when there is no current directory or `old` is
  not in it.

### `kornshell.builtins_sh`

`label_status` for `:`, `true` and `false`; `parse_umask` and
`format_umask` for numeric and symbolic `umask` (bad masks raise
`UmaskError`); `format_time` and `times_report` for the `times` built-in.

## Example

```python
from kornshell.keymap import default_keymap, encode_keys
from kornshell.emacs import EmacsLine
from kornshell.builtins_sh import parse_umask, format_umask

keymap = default_keymap()
keymap.find(encode_keys("^A")).function.name   # 'beginning-of-line'

line = EmacsLine("hello world")
line.backward_word()
line.delete_word_forward()   # line.text == 'hello '
line.yank()                  # line.text == 'hello world'

mask = parse_umask("u=rwx,go-w", 0o022)   # 0o022
format_umask(mask, symbolic=True)         # 'u=rwx,g=rx,o=rx'
```

## What it does not do

This is a library, not a shell. There is no command to run, no parser or
command execution, no terminal handling or screen drawing for the editor,
no file or command globbing against the file system, and no `ulimit`,
`typeset` or `kill` support.