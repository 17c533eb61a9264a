# progdemos

A collection of small, focused programs and libraries, each doing one job.

## Libraries

- **`progdemos.eval`**: `parse` turns text into an expression tree (`Var`,
  `Literal`, `Unary`, `Binary`, `Call`) supporting `+ - * /`, unary signs,
  parentheses, variables and the functions `pow`, `sin` and `sqrt`. Each
  expression has `eval(env)` and `check(vars)`; `format_expr` prints it fully
  parenthesised. Errors are raised as `ExprError`.
- **`progdemos.intset`**: `IntSet`, a set of small non-negative integers
  backed by a bit vector, with `add`, `has`, `union_with`, `words`, iteration
  and `in`.
- **`progdemos.geometry`**: `Point` (with `distance` and `scale_by`), the
  function `distance`, `Path` (a list of points with a `distance` method),
  `RGBA` and `ColoredPoint`.
- **`progdemos.toposort`**: `topo_sort` orders the nodes of a dependency
  graph so that each comes after its prerequisites.
- **`progdemos.sorting`**: `Track`, `parse_duration`, `format_duration`,
  `format_tracks` and the sort keys `by_artist`, `by_year` and `custom_key`.
- **`progdemos.tempconv`**: `Celsius`, `Fahrenheit`, `c_to_f`, `f_to_c` and
  `parse_celsius` (accepts `100C`, `212°F` and the like).
- **`progdemos.htmldoc`**: `parse_html` builds a `Node` tree with an HTML5
  parser; `Node.iter` and `Node.walk` traverse it.
- **`progdemos.links`**, **`progdemos.outline`**, **`progdemos.title`**:
  list the links of a document (`visit`, `extract`, `find_links`), crawl
  breadth-first (`breadth_first`, `crawl`), print an element outline
  (`outline_paths`, `outline_tags`), find a document's title (`titles`,
  `sole_title`, `fetch_title`).
- **`progdemos.fetch`**: `fetch` saves a URL to a local file;
  `wait_for_server` retries with exponential back-off until a server answers
  or raises `TimeoutError`.
- **`progdemos.xmlselect`**: `select` yields the text under named XML
  elements; `contains_all` checks an ordered subsequence.
- **`progdemos.du`**: `walk_dir`, `walk_parallel` and `disk_usage` count
  files and bytes under directory trees, in parallel, with cancellation.
- **`progdemos.memo`**: thread-safe memoization, either lock-based (`Memo`)
  or served by a monitor thread (`MemoServer`, a context manager); plus
  `http_get_body`, `sequential` and `concurrent` for timing fetches.
- **`progdemos.bank`**: a concurrency-safe single-account bank, lock-based
  (`Bank`) or run by a teller thread (`TellerBank`).
- **`progdemos.thumbnail`**: `thumbnail_image`, `image_stream`,
  `image_file_to`, `image_file` and `make_thumbnails` produce 128-pixel JPEG
  thumbnails of any image Pillow can read.
- **`progdemos.cake`**: `Shop`, a simulation of a baker, icers and an
  inscriber connected by bounded queues.
- **`progdemos.pipeline`**, **`progdemos.countdown`**,
  **`progdemos.spinner`**, **`progdemos.crawl`**: a counting/squaring
  pipeline, an abortable countdown, a spinner beside a slow `fib`, and a
  concurrent crawler with a bound on parallel fetches (`crawl_concurrent`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Library use

```python
from progdemos.intset import IntSet

s = IntSet()
s.add(1)
s.add(144)
s.add(9)
print(s)          # {1 9 144}
print(9 in s)     # True
```

```python
from progdemos.eval import ExprError, parse

print(parse("pow(x, 3) + pow(y, 3)").eval({"x": 9, "y": 10}))  # 1729.0

try:
    parse("x % 2")
except ExprError as err:
    print(err)    # unexpected '%'
```

```python
from progdemos.toposort import topo_sort

print(topo_sort({"compilers": ["data structures"],
                 "data structures": ["discrete math"]}))
# ['discrete math', 'data structures', 'compilers']
```

## Commands

Each command is installed with the package. Servers listen on
`localhost:8000` unless told otherwise.

| Command | What it does |
| --- | --- |
| `progdemos-toposort` | print courses in an order that respects their prerequisites |
| `progdemos-sorting` | print a sample playlist sorted in several orders |
| `progdemos-tempflag` | print the temperature given with `-temp` (e.g. `-temp 212F`; default 20°C) |
| `progdemos-surface` | serve SVG plots at `/plot?expr=...`, using the variables `x`, `y` and `r` |
| `progdemos-findlinks` | print the links of the documents at the URLs, or of HTML on standard input; `--crawl` crawls breadth-first instead |
| `progdemos-outline` | print the element outline of the documents at the URLs, or of HTML on standard input |
| `progdemos-title` | print the title of the HTML documents at the URLs |
| `progdemos-fetch` | save URLs into files in the current directory; `--wait URL` waits up to a minute for a server |
| `progdemos-store` | serve a price list at `/list` and `/price?item=...` |
| `progdemos-xmlselect` | print the text under the named elements of the XML on standard input |
| `progdemos-du` | report the number of files and their total size; `-v` shows progress, `-c` stops on input |
| `progdemos-thumbnail` | make a `.thumb` JPEG of each image file named on a line of standard input |
| `progdemos-chat` | run a TCP chat server (`--host`, `--port`) |
| `progdemos-clock` | run a TCP server that writes the time every second (`--sequential` for one client at a time) |
| `progdemos-reverb` | run a TCP server that echoes each line back (`--delay`, `--concurrent`) |
| `progdemos-netcat` | copy between a TCP server and the terminal (`--read-only` to only receive) |
| `progdemos-pipeline` | print squares from a three-stage pipeline (`--limit`, `--forever`) |
| `progdemos-countdown` | count down to launch, abortable with return (`--from`, `--no-abort`) |
| `progdemos-spinner` | show a spinner while computing a Fibonacci number |
| `progdemos-crawl` | crawl the web concurrently from the URLs (`--limit` concurrent fetches) |

Run any command with `--help` for its options.