from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Callable, Iterator

from .error import ScanError
from .rolling_hash import BuzHash
from .stats import ScanStats
from .table import DEFAULT_TABLE, RandomTable

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1 << 20  # 1 MiB reads when streaming files


@dataclass(frozen=True)
class ScanMatch:
  start: int
  end: int


def read_chunks(stream: IO[bytes], chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
  if chunk_size <= 0:
    raise ValueError('chunk_size must be positive')

  while True:
    chunk = stream.read(chunk_size)
    if not chunk:
      return
    yield chunk


class Scanner:
  """
  Locate a phrase in a byte stream by comparing rolling window hashes against the phrase hash.

  The stream may be fed in arbitrary chunks; match offsets are absolute. A hash match is only a
  candidate: with ``verify`` the window bytes are compared to the phrase and collisions dropped.
  """

  def __init__(self, phrase: bytes, *, verify: bool = True, table: RandomTable = DEFAULT_TABLE):
    if not phrase:
      raise ScanError('phrase must not be empty')

    self.phrase = bytes(phrase)
    self.verify = verify

    self._engine = BuzHash(len(self.phrase), table)
    self.target = self._engine.update(self.phrase)
    self._engine.reset()

    self._offset = 0
    self._tail = b''
    self._candidates = 0
    self._matches = 0

  def feed(self, chunk: bytes) -> list[ScanMatch]:
    length = len(self.phrase)
    view = self._tail + bytes(chunk)
    base = self._offset - len(self._tail)
    found: list[ScanMatch] = []

    for end, value in enumerate(self._engine.hashes(chunk), start=self._offset + 1):
      if value != self.target or end < length:
        continue

      self._candidates += 1
      start = end - length

      if self.verify and view[start - base : end - base] != self.phrase:
        logger.debug('hash collision at bytes %d..%d', start, end)
        continue

      logger.debug('match at bytes %d..%d', start, end)
      self._matches += 1
      found.append(ScanMatch(start=start, end=end))

    self._offset += len(chunk)
    self._tail = view[-(length - 1) :] if length > 1 else b''

    return found

  @property
  def stats(self) -> ScanStats:
    return ScanStats(
      bytes_scanned=self._offset, candidates=self._candidates, matches=self._matches
    )


def find_phrase(
  data: bytes,
  phrase: bytes,
  *,
  verify: bool = True,
  table: RandomTable = DEFAULT_TABLE,
) -> list[ScanMatch]:
  return Scanner(phrase, verify=verify, table=table).feed(data)


def scan_stream(
  stream: IO[bytes],
  phrase: bytes,
  *,
  chunk_size: int = DEFAULT_CHUNK_SIZE,
  verify: bool = True,
  progress: Callable[[int], None] | None = None,
  table: RandomTable = DEFAULT_TABLE,
) -> tuple[list[ScanMatch], ScanStats]:
  """
  Scan ``stream`` for ``phrase``. ``progress`` is called with the size of each chunk consumed.
  """
  scanner = Scanner(phrase, verify=verify, table=table)
  matches: list[ScanMatch] = []

  for chunk in read_chunks(stream, chunk_size):
    matches.extend(scanner.feed(chunk))
    if progress is not None:
      progress(len(chunk))

  stats = scanner.stats
  logger.debug(
    'scanned %d bytes: %d candidates, %d matches', stats.bytes_scanned, stats.candidates, stats.matches
  )

  return matches, stats


def scan_file(
  path: Path | str,
  phrase: bytes,
  *,
  chunk_size: int = DEFAULT_CHUNK_SIZE,
  verify: bool = True,
  progress: Callable[[int], None] | None = None,
  table: RandomTable = DEFAULT_TABLE,
) -> tuple[list[ScanMatch], ScanStats]:
  with Path(path).open('rb') as fh:
    return scan_stream(
      fh, phrase, chunk_size=chunk_size, verify=verify, progress=progress, table=table
    )
