from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pytest

from pybuzhash.__main__ import main as cli_main

LOREM_IPSUM = b"""Lorem ipsum dolor sit amet, consectetuer adipiscing elit.
Aenean commodo ligula eget dolor. Aenean massa. Cum sociis natoque penatibus et
magnis dis parturient montes, nascetur ridiculus mus. Donec quam felis,
ultricies nec, pellentesque eu, pretium quis, sem. Nulla consequat massa quis
enim. Donec pede justo, fringilla vel, aliquet nec, vulputate eget, arcu. In
enim justo, rhoncus ut, imperdiet a, venenatis vitae, justo. Nullam dictum felis
eu pede mollis pretium. Integer tincidunt. Cras dapibus. Vivamus elementum
semper nisi. Aenean vulputate eleifend tellus. Aenean leo ligula, porttitor eu,
consequat vitae, eleifend ac, enim. Aliquam lorem ante, dapibus in, viverra
quis, feugiat a, tellus. Phasellus viverra nulla ut metus varius laoreet.
Quisque rutrum. Aenean imperdiet. Etiam ultricies nisi vel augue. Curabitur
ullamcorper ultricies nisi. Nam eget dui.
"""


@dataclass(slots=True)
class CompletedRun:
  exit_code: int
  stdout: str
  stderr: str


@pytest.fixture
def lorem_ipsum() -> bytes:
  return LOREM_IPSUM


@pytest.fixture
def run_cli(
  monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> Callable[..., CompletedRun]:
  """
  Execute the CLI with arguments while capturing output.

  The first argument should be a working directory (typically ``tmp_path``) so tests may control
  the execution environment. Additional positional arguments are passed to the CLI after being
  converted to strings, allowing ``Path`` instances to be supplied directly.
  """

  def _run_cli(working_dir: Path, *args: object) -> CompletedRun:
    argv = ['pybuzhash', *(str(arg) for arg in args)]
    monkeypatch.setattr(sys, 'argv', argv)
    monkeypatch.chdir(working_dir)

    exit_code = cli_main()
    captured = capsys.readouterr()

    return CompletedRun(exit_code=exit_code, stdout=captured.out, stderr=captured.err)

  return _run_cli
