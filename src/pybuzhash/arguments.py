from __future__ import annotations

import argparse
import typing as t
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .rolling_hash import MAX_WINDOW_SIZE

DEFAULT_WINDOW_SIZE = 48


class HelpFormatter(argparse.HelpFormatter):
  """
  Help formatter that keeps usage on one line of bracketed flags and lists each option once.
  """

  def __init__(
    self,
    prog: str,
    indent_increment: int = 2,
    max_help_position: int = 50,
    width: t.Optional[int] = None,
  ):
    super().__init__(prog, indent_increment, max_help_position, width)

  def _format_usage(
    self,
    usage: t.Optional[str],
    actions: t.Iterable[argparse.Action],
    groups: t.Iterable[argparse._MutuallyExclusiveGroup],
    prefix: t.Optional[str],
  ) -> str:
    if usage is not None:
      return usage

    parts: list[str] = []

    for action in actions:
      if isinstance(action, argparse._HelpAction):
        continue

      if not action.option_strings:
        display = self._format_args(action, action.dest)
      elif action.nargs == 0:
        display = action.option_strings[0]
      else:
        metavar = self._metavar_formatter(action, action.dest)(1)[0]
        display = f'{action.option_strings[0]} {metavar}'

      parts.append(display if action.required else f'[{display}]')

    return f'{prefix or "usage: "}{self._prog} {" ".join(parts)}\n\n'

  def _format_action_invocation(self, action: argparse.Action) -> str:
    if not action.option_strings:
      return self._format_args(action, action.dest)

    if isinstance(action, argparse._HelpAction):
      return '-h --help'

    return action.option_strings[0]

  def _format_action(self, action: argparse.Action) -> str:
    if isinstance(action, argparse._HelpAction):
      help_text = 'Show this help message and exit'
    else:
      help_text = action.help or ''

    # A store_false default describes the option being absent, not the flag.
    show_default = not isinstance(action, argparse._StoreFalseAction)

    if show_default and action.default is not None and action.default != argparse.SUPPRESS:
      help_text = f'{help_text} (default: {str(action.default)})'

    return f'  {self._format_action_invocation(action)} {help_text}\n'


class Mode(str, Enum):
  """What to do with the input."""

  DIGEST = 'digest'
  FIND = 'find'

  def __str__(self) -> str:
    return self.value


def _window_size(value: str) -> int:
  try:
    size = int(value)
  except ValueError:
    raise argparse.ArgumentTypeError(f'invalid window size: {value!r}') from None

  if not 0 <= size <= MAX_WINDOW_SIZE:
    raise argparse.ArgumentTypeError(f'window size must be between 0 and {MAX_WINDOW_SIZE}')

  return size


@dataclass
class Arguments:
  """
  A wrapper class providing concrete types for parsed command-line arguments.
  """

  path: Path
  mode: Mode
  window_size: t.Optional[int]
  phrase: t.Optional[str]
  verify: bool
  verbose: bool

  @staticmethod
  def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
      prog='pybuzhash',
      description='Compute BuzHash rolling window hashes of a file.',
      formatter_class=HelpFormatter,
    )

    parser.add_argument('path', type=Path, help='File to read, or - for standard input')

    parser.add_argument(
      '--mode',
      type=Mode,
      choices=list(Mode),
      default=Mode.DIGEST,
      help='Print the final window hash or find a phrase by its hash.',
    )

    parser.add_argument(
      '--window-size',
      type=_window_size,
      help=f'Window size in bytes (digest mode uses {DEFAULT_WINDOW_SIZE} when omitted).',
    )

    parser.add_argument('--phrase', help='Phrase to look for in find mode.')

    parser.add_argument(
      '--no-verify',
      dest='verify',
      action='store_false',
      help='Report hash matches without comparing bytes.',
    )

    parser.add_argument(
      '-v',
      '--verbose',
      action='store_true',
      help='Print every hash and log debug output.',
    )

    return parser

  @staticmethod
  def from_args(argv: t.Optional[t.Sequence[str]] = None) -> Arguments:
    return Arguments(**vars(Arguments.build_parser().parse_args(argv)))
