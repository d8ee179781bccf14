from __future__ import annotations

from pathlib import Path

import pytest

from pybuzhash.arguments import Arguments, Mode


def _actions() -> dict:
  return {action.dest: action for action in Arguments.build_parser()._actions}


def test_usage_lists_every_option_on_one_line() -> None:
  usage = Arguments.build_parser().format_usage()

  assert usage.startswith('usage: pybuzhash path ')
  assert usage.endswith('\n')
  assert '[--mode {digest,find}]' in usage
  assert '[--window-size window_size]' in usage
  assert '[--phrase phrase]' in usage
  assert '[--no-verify]' in usage
  assert '[-v]' in usage
  assert 'Mode.' not in usage


def test_help_shows_mode_default_by_value() -> None:
  formatter = Arguments.build_parser()._get_formatter()

  assert formatter._format_action(_actions()['mode']) == (
    '  --mode Print the final window hash or find a phrase by its hash. (default: digest)\n'
  )


def test_help_omits_default_of_negated_flag() -> None:
  formatter = Arguments.build_parser()._get_formatter()
  actions = _actions()

  assert formatter._format_action(actions['verify']) == (
    '  --no-verify Report hash matches without comparing bytes.\n'
  )
  assert formatter._format_action(actions['verbose']) == (
    '  -v Print every hash and log debug output. (default: False)\n'
  )
  assert formatter._format_action(actions['help']) == '  -h --help Show this help message and exit\n'


def test_help_skips_missing_defaults() -> None:
  formatter = Arguments.build_parser()._get_formatter()

  assert formatter._format_action(_actions()['window_size']) == (
    '  --window-size Window size in bytes (digest mode uses 48 when omitted).\n'
  )


def test_mode_renders_as_its_value() -> None:
  assert str(Mode.DIGEST) == 'digest'
  assert str(Mode.FIND) == 'find'


def test_arguments_from_args_parses_all_fields(tmp_path: Path) -> None:
  target = tmp_path / 'input.bin'

  args = Arguments.from_args(
    [
      str(target),
      '--mode',
      'find',
      '--window-size',
      '5',
      '--phrase',
      'hello',
      '--no-verify',
      '--verbose',
    ]
  )

  assert args.path == target
  assert args.mode is Mode.FIND
  assert args.window_size == 5
  assert args.phrase == 'hello'
  assert args.verify is False
  assert args.verbose is True


def test_arguments_from_args_uses_defaults(tmp_path: Path) -> None:
  args = Arguments.from_args([str(tmp_path / 'input.bin')])

  assert args.mode is Mode.DIGEST
  assert args.window_size is None
  assert args.phrase is None
  assert args.verify is True
  assert args.verbose is False


@pytest.mark.parametrize('value', ['-1', '65536', 'big'])
def test_arguments_reject_invalid_window_size(value: str) -> None:
  with pytest.raises(SystemExit):
    Arguments.from_args(['input.bin', '--window-size', value])


def test_arguments_accept_window_size_bounds() -> None:
  assert Arguments.from_args(['input.bin', '--window-size', '0']).window_size == 0
  assert Arguments.from_args(['input.bin', '--window-size', '65535']).window_size == 65535
