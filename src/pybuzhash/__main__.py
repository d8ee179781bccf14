from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Callable, Iterator, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import (
  BarColumn,
  DownloadColumn,
  Progress,
  TaskProgressColumn,
  TextColumn,
  TimeRemainingColumn,
)
from rich.table import Table

from pybuzhash.arguments import DEFAULT_WINDOW_SIZE, Arguments, Mode
from pybuzhash.error import BuzHashError
from pybuzhash.rolling_hash import BuzHash
from pybuzhash.scan import ScanMatch, read_chunks, scan_stream
from pybuzhash.stats import ScanStats

logger = logging.getLogger('pybuzhash')


def _configure_logging(console: Console, verbose: bool) -> None:
  handler = RichHandler(console=console, show_path=False, show_time=False)
  handler.setFormatter(logging.Formatter('%(message)s'))

  logger.handlers[:] = [handler]
  logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
  logger.propagate = False


def _resolve_window_size(args: Arguments) -> int:
  if args.mode == Mode.DIGEST:
    if args.phrase is not None:
      raise BuzHashError('--phrase can only be used with --mode find')

    return args.window_size if args.window_size is not None else DEFAULT_WINDOW_SIZE

  if not args.phrase:
    raise BuzHashError('--mode find requires a non-empty --phrase')

  phrase_length = len(args.phrase.encode())

  if args.window_size is not None and args.window_size != phrase_length:
    raise BuzHashError(
      f'--window-size must match the phrase length ({phrase_length} bytes) in find mode'
    )

  return phrase_length


@contextmanager
def _open_input(path: Path) -> Iterator[IO[bytes]]:
  if str(path) == '-':
    yield sys.stdin.buffer
    return

  with path.open('rb') as fh:
    yield fh


def _input_size(path: Path) -> Optional[int]:
  if str(path) == '-':
    return None

  try:
    return path.stat().st_size
  except OSError:
    return None


def _make_progress(console: Console, total: Optional[int], *, enable: bool) -> Optional[Progress]:
  progress = Progress(
    TextColumn('[progress.description]{task.description}'),
    BarColumn(),
    TaskProgressColumn(),
    DownloadColumn(),
    TimeRemainingColumn(),
    console=console,
    transient=True,
    disable=(not enable) or (not console.is_interactive) or not total,
  )

  if progress.disable:
    return None

  return progress


def _run_digest(
  stream: IO[bytes],
  window_size: int,
  console: Console,
  *,
  verbose: bool,
  advance: Optional[Callable[[int], None]] = None,
) -> int:
  engine = BuzHash(window_size)
  offset = 0

  for chunk in read_chunks(stream):
    if verbose:
      for value in engine.hashes(chunk):
        console.print(f'{offset:>10} 0x{value:08x}', highlight=False)
        offset += 1
    else:
      engine.update(chunk)
      offset += len(chunk)

    if advance is not None:
      advance(len(chunk))

  logger.debug('hashed %d bytes with a %d byte window', offset, window_size)

  return engine.digest()


def _print_matches(
  matches: list[ScanMatch], stats: ScanStats, phrase: str, console: Console, verify: bool
) -> None:
  if not matches:
    console.print(f'[bold cyan]No match for[/] {escape(repr(phrase))}.')
  else:
    table = Table(show_lines=False)
    table.add_column('Start', justify='right')
    table.add_column('End', justify='right')

    for match in matches:
      table.add_row(f'{match.start:,}', f'{match.end:,}')

    console.print(table)

  summary = f'scanned {stats.bytes_scanned:,} bytes | {stats.matches:,} matches'
  if verify:
    summary += f' | {stats.collisions:,} collisions'

  console.print(f'[bold green]Total:[/] {summary}')


def _execute(
  arguments: Arguments,
  window_size: int,
  console: Console,
  advance: Optional[Callable[[int], None]],
) -> None:
  with _open_input(arguments.path) as stream:
    if arguments.mode == Mode.FIND:
      phrase = arguments.phrase or ''
      matches, stats = scan_stream(
        stream, phrase.encode(), verify=arguments.verify, progress=advance
      )
      _print_matches(matches, stats, phrase, console, arguments.verify)
      return

    digest = _run_digest(stream, window_size, console, verbose=arguments.verbose, advance=advance)

  console.print(f'0x{digest:08x}', highlight=False)


def main(argv: Optional[list[str]] = None) -> int:
  arguments = Arguments.from_args(argv)

  console, err_console = Console(), Console(stderr=True)
  _configure_logging(err_console, arguments.verbose)

  try:
    window_size = _resolve_window_size(arguments)

    total = _input_size(arguments.path)
    progress = _make_progress(err_console, total, enable=not arguments.verbose)

    if progress is not None:
      with progress:
        task_id = progress.add_task('Hashing', total=total)
        _execute(
          arguments, window_size, console, lambda size: progress.advance(task_id, size)
        )
    else:
      _execute(arguments, window_size, console, None)
  except (BuzHashError, OSError) as exc:
    err_console.print(f'[bold red]error:[/] {escape(str(exc))}')
    return 1

  return 0


if __name__ == '__main__':
  raise SystemExit(main())
