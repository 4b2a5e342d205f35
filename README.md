# musicterm

Building blocks for a terminal music player: a navigable stack of
directory listings, detection of the terminal's image protocol, control
of an `ueberzugpp` daemon for showing images, and audio downloads
through `yt-dlp`.

The package has no dependencies outside the standard library. It runs
on POSIX systems; image display needs `ueberzugpp` or a terminal that
speaks the kitty graphics protocol, and downloads need `yt-dlp` on
`PATH`.

## Installation

```
pip install .
```

## Modules

- `musicterm.dirstate`: `DirState` keeps the selected index, the set of
  marked indices and the content and viewport lengths of a list.
  `select` clamps into range; `next`/`prev` wrap around;
  `next_half_viewport`/`prev_half_viewport` move by half the viewport;
  `remove` shifts marks down past the removed index. `ScrollbarState`
  mirrors the position and lengths for drawing a scrollbar.
- `musicterm.items`: `item_path`, `item_matches` (case-insensitive
  substring) and `to_list_item` for plain strings or any object
  following the `DirStackItem` protocol; `ListItem` is a rendered row.
- `musicterm.directory`: `Dir` holds one level's items, its `DirState`
  and an optional `filter`. It offers selection, marking, removal,
  `replace`, and `jump_next_matching`/`jump_previous_matching` over the
  filter.
- `musicterm.stack`: `DirStack` keeps the current `Dir`, the levels
  above it (`previous`), the `path` leading to it, and an optional
  `preview`. `push` descends, `pop` goes up (always leaving one level
  above), `next_path` gives the path of the selected entry.
- `musicterm.terminal`: tmux helpers (`is_inside_tmux`, `wrap`,
  `wrap_print`, `is_passthrough_enabled`, `enable_passthrough`),
  `error_status` to flatten an exception chain into one line, and
  `determine_image_support`, which returns an `ImageProtocol`
  (`KITTY`, `UEBERZUG_WAYLAND`, `UEBERZUG_X11` or `NONE`).
- `musicterm.ueberzug`: `Ueberzug` starts and drives an `ueberzugpp`
  daemon from a background thread (`start(Layer.X11)`, `show_image`,
  `remove_image`, `cleanup`); `add_command`, `remove_command` and
  `socket_path` build the JSON commands and socket path it uses.
- `musicterm.ytdlp`: `VideoId.from_url` takes the `v` parameter from a
  `youtube.com/watch` URL; `YtDlp(cache_dir).download(url)` downloads the
  audio into `<cache_dir>youtube/` unless a file with the id is already
  there, and returns the file's path. Failures raise `YtDlpError`.

## Example

```python
from musicterm.stack import DirStack

stack = DirStack(["a", "b", "c"])
stack.current.select_idx(1)
stack.push(["d", "e", "f"])
stack.current.select_idx(2)
print(stack.next_path())  # ['b', 'f']
stack.pop()
print(stack.current.items)  # ['a', 'b', 'c']
```

```python
from musicterm.terminal import ImageProtocol, determine_image_support
from musicterm.ueberzug import Layer, Ueberzug

if determine_image_support() is ImageProtocol.UEBERZUG_X11:
    viewer = Ueberzug().start(Layer.X11)
    viewer.show_image("/tmp/cover.jpg", 0, 0, 20, 10)
    viewer.cleanup()
```

## What it does not do

There is no player screen, no drawing of widgets into a terminal buffer
and no connection to a music server: the package supplies the state
objects and helpers such a program would use, not the program. Images
can be shown through `ueberzugpp` only; although kitty support is
detected, the package does not encode or send kitty image data. There is
no command-line entry point.

## Tests

```
pip install .[test]
pytest
```