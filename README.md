# deskkit

Small building blocks for a minimal desktop:

- a status-line generator that gathers system readings (CPU, memory,
  swap, battery, disk, date and time, shell command output and more)
  and joins them into one line;
- a file-test filter that prints the paths passing a set of tests;
- a menu model with incremental, token-based matching of items;
- a model of a dynamic tiling window manager: monitors, clients, tags,
  rules, size hints and the tile and monocle layouts.

It has no dependencies beyond the standard library and targets Linux
and other POSIX systems.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Commands

### deskkit-status

Builds the status line once a second from its built-in components:
CPU usage, memory usage, the output of `pamixer --get-volume-human`,
and the date and time (`%F %T`). A component that cannot be read shows
as `n/a`.

```
deskkit-status -s     # write each status line to standard output
deskkit-status -1     # write a single status line and exit
deskkit-status -v     # print the version to standard error and exit
```

Without `-s` or `-1` the line is set as the root window name by running
`xsetroot -name`; this needs `DISPLAY` to be set and `xsetroot` to be
installed. The name is cleared on exit. SIGINT and SIGTERM stop the
loop; SIGUSR1 redraws at once.

### deskkit-stest

Filters a list of files by tests, in the manner of `test(1)`. Paths
come from the command line, or from standard input one per line when
none are given. Each path that passes every test is printed.

```
deskkit-stest -f -x /usr/bin/*        # regular, executable files
ls | deskkit-stest -d                 # directories among the names read
deskkit-stest -l -x /usr/bin          # test the contents of a directory
deskkit-stest -n reference.txt *.log  # files newer than reference.txt
```

Flags: `-a` include hidden files, `-b` block special, `-c` character
special, `-d` directory, `-e` exists, `-f` regular file, `-g`
set-group-id, `-h` symbolic link, `-l` test directory contents, `-n FILE`
newer than FILE, `-o FILE` older than FILE, `-p` named pipe, `-q` quiet
(exit on the first match), `-r` readable, `-s` not empty, `-u`
set-user-id, `-v` invert, `-w` writable, `-x` executable.

The exit status is 0 when something matched, 1 when nothing did and 2
on a usage error.

## Library

The pieces are plain Python and can be used on their own.

```python
from deskkit.util import fmt_human

fmt_human(1536, 1024)       # '1.5 Ki'
fmt_human(2_000_000, 1000)  # '2.0 M'
```

Status components take one argument (a path, a format, a command, or
nothing) and return their reading as a string, or `None` when it cannot
be obtained. `render_status` joins them:

```python
from deskkit.basic import datetime, hostname
from deskkit.status import Component, render_status

line = render_status([
    Component(hostname, "%s | "),
    Component(datetime, "%s", "%H:%M"),
])
```

The menu keeps input text, the matching items (exact matches first,
then prefix matches, then substring matches) and the selection:

```python
from deskkit.menu import Menu, read_items

menu = Menu(read_items(["foo\n", "bar\n", "foobar\n"]))
menu.insert("foo")
[item.text for item in menu.matches]   # ['foo', 'foobar']
menu.selected.text                      # 'foo'
```

The window manager model works on plain numbers, with no display
connection:

```python
from deskkit.manager import WindowManager

wm = WindowManager(1920, 1080, bar_height=20)
client = wm.manage(1, 0, 0, 100, 100, cls="xterm")
(client.x, client.y, client.w, client.h)   # (0, 20, 1918, 1058)
```

Modules:

- `deskkit.util` – `warn`, `die`, `fmt_human` and `FatalError`.
- `deskkit.args` – `parse_flags` for short-option command lines;
  raises `UsageError`.
- `deskkit.stest` – the `Filter` behind `deskkit-stest`, and `main`.
- `deskkit.basic` – `cat`, `datetime`, `disk_free`, `disk_perc`,
  `disk_total`, `disk_used`, `hostname`, `kernel_release`, `num_files`,
  `run_command`, `gid`, `uid`, `username`.
- `deskkit.sysinfo` – `cpu_freq`, `CpuPercent`, `entropy`, `uptime`,
  `load_avg`, `temp`.
- `deskkit.power` – `battery_perc`, `battery_state`,
  `battery_remaining`, read from `/sys/class/power_supply`.
- `deskkit.memory` – `ram_free`, `ram_perc`, `ram_total`, `ram_used`,
  `swap_free`, `swap_perc`, `swap_total`, `swap_used`, read from
  `/proc/meminfo`.
- `deskkit.status` – `Component`, `render_status`, `default_components`
  and `main`.
- `deskkit.menu` – `Menu`, `Item`, `read_items` and the case-insensitive
  search `cistrstr`.
- `deskkit.clients` – `Client`, `Monitor`, `Screen`, `Rule`,
  `SizeHints`, `intersect`, `rect_to_monitor`, `apply_rules`.
- `deskkit.layouts` – `Layout`, `tile`, `monocle`, `resize`,
  `default_layouts`.
- `deskkit.manager` – `WindowManager` and `WindowConfig`: managing
  windows, focus, tags, views, layouts and monitors.

## What it does not do

- The menu is a model only: there is no menu window, no drawing and no
  keyboard handling, and no command that starts it.
- The window manager is a model only: it does not connect to an X
  server, handle events, draw a bar, grab keys or start programs, and
  there is no command that runs it.
- There are no status components for network addresses, network speed,
  wireless signal or name, audio volume from a mixer device, or keyboard
  layout and indicators. The status components read Linux `/proc` and
  `/sys` files; other systems are not covered.
- The components shown by `deskkit-status` cannot be changed from the
  command line; build another list and use `render_status` for that.