# rsedit

rsedit is a small text editor that runs in a terminal. It works on
grapheme clusters, so wide characters (such as CJK) take two columns and
combining sequences move and delete as one unit. Characters that would
otherwise be hard to see are drawn with stand-ins:

- a tab is drawn as a single space,
- other visible whitespace is drawn as `␣`,
- a lone control character is drawn as `▯`,
- other zero-width characters are drawn as `·`.

A line that is wider than the screen is cut at the edge of the screen,
and `⋯` marks a wide character that the edge cuts in half.

## Installation

```
pip install .
```

rsedit needs a POSIX terminal. It puts the terminal into raw mode and
reads keys from standard input.

## Usage

Open a file:

```
rsedit notes.txt
```

Start with an empty buffer and name it when you save:

```
rsedit
```

When the buffer is empty, a welcome line is shown. If the file cannot be
read, the editor starts with an empty buffer and the hint line shows
`[ Error opening the file ]`.

### Keys

| Key                  | Action                                                   |
|----------------------|----------------------------------------------------------|
| Arrow keys           | Move the cursor (Left/Right wrap between lines)          |
| Home / End           | Jump to the start or end of the line                     |
| Page Up / Page Down  | Move up or down by one screen height less one line       |
| Enter                | Split the line at the cursor                             |
| Tab                  | Insert four spaces                                       |
| Backspace            | Delete before the cursor, joining lines at line start    |
| Delete               | Delete at the cursor, joining lines at line end          |
| Control + F          | Search                                                   |
| Control + S          | Save                                                     |
| Control + Q          | Quit                                                     |
| Escape               | Cancel the current prompt                                |

**Saving.** If the buffer came from a file, Control + S writes it back
to that file. Otherwise a `Save as:` prompt appears: type a file name and
press Enter, or press Escape to cancel. Files are read and written as
UTF-8. Every line is written with a trailing newline.

**Quitting.** Control + Q quits unless the buffer has unsaved changes and
was loaded from or saved to a file. In that case the hint line shows
`[ Error quitting. The file has unsaved changes ]`. A buffer that has
never had a file name quits without a warning, even if it has changes.

**Searching.** Control + F opens a `Search:` prompt. As you type, the
cursor jumps to the next match and every visible match is highlighted.
The match under the cursor gets a lighter highlight. Down or Right goes
to the next match and Up or Left goes to the previous one. Both wrap
around the document. Enter ends the search and keeps the cursor where it
is. Escape ends the search and puts the cursor back where it was.

The status bar shows the file name, whether the buffer is modified, the
current line number with the line count, and the number of lines. The
line below it shows hints, or the prompt while one is open. The
terminal title is set to `Rsedit - <file name>`.

## What it does not do

rsedit has no undo, no selection, clipboard, mouse support or syntax
highlighting. It has no options or configuration. It takes at most one
file name. Keys pressed with Alt and function keys are recognised and
then ignored.

## Library use

The parts of the editor can be used from Python:

- `rsedit.line.Line` is one line of text, with grapheme-aware insertion,
  deletion, splitting, searching (`search_next`, `search_previous`) and
  clipping to screen columns (`visible_graphemes`,
  `annotated_visible_substr`).
- `rsedit.buffer.Buffer` loads, edits, searches and saves a document.
  Positions in it are given as `rsedit.buffer.Location`.
- `rsedit.annotated.AnnotatedString` is a string with highlight ranges
  that follow edits. Iterating over it yields `AnnotatedStringPart` runs.
- `rsedit.commands.command_from_event` maps `KeyEvent` and `ResizeEvent`
  objects to editor commands. `rsedit.terminal.decode_input` turns raw
  terminal input into `KeyEvent` objects.
- `rsedit.editor.Editor` runs the whole editor on a
  `rsedit.terminal.Terminal`.

```python
from rsedit.buffer import Buffer, Location

buffer = Buffer.load("notes.txt")
found = buffer.search_next("todo", Location(grapheme_index=0, line_index=0))
if found is not None:
    print(found.line_index, found.grapheme_index)
```

## Running the tests

```
pip install .[test]
pytest
```