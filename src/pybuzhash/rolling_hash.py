from __future__ import annotations

import struct
from typing import Iterable, Iterator

from .error import ByteValueError, SnapshotError, WindowSizeError
from .table import DEFAULT_TABLE, RandomTable

MAX_WINDOW_SIZE = 0xFFFF

_MASK = 0xFFFFFFFF

# hash (u32), window size (u16), position (u16), filled (u8)
_HEADER = struct.Struct('<IHHB')
HEADER_SIZE = _HEADER.size


def rotl32(value: int, amount: int) -> int:
  amount &= 31
  value &= _MASK
  return ((value << amount) | (value >> (32 - amount))) & _MASK


def _check_window_size(window_size: int) -> None:
  if not isinstance(window_size, int) or not 0 <= window_size <= MAX_WINDOW_SIZE:
    raise WindowSizeError(
      f'window size must be an integer between 0 and {MAX_WINDOW_SIZE}, got {window_size!r}'
    )


def required_storage(window_size: int) -> int:
  """Bytes needed to hold one engine of ``window_size``: the fixed header plus the window."""
  _check_window_size(window_size)
  return HEADER_SIZE + window_size


class BuzHash:
  """
  BuzHash over the last ``window_size`` bytes of a stream, producing a 32-bit value.

  Every byte entering the window is XOR-ed in through its table word. Before each insertion the
  whole state is rotated left by one bit, so a byte's word ends up rotated by its age. The byte
  leaving the window has been rotated exactly ``window_size`` times when it is evicted, which is
  why it is removed by XOR-ing in its word rotated by ``window_size``.

  Until ``window_size`` bytes have been fed the window simply grows: the hash is the one a
  smaller engine would produce over everything seen so far.

  An instance is not safe to drive from several threads at once; create one engine per stream.
  """

  __slots__ = ('window_size', 'position', 'filled', 'table', '_state', '_window')

  def __init__(self, window_size: int, table: RandomTable = DEFAULT_TABLE):
    _check_window_size(window_size)
    self.window_size = window_size
    self.table = table
    self._window = bytearray(window_size)
    self.reset()

  def reset(self) -> None:
    """Return to the empty state. The window buffer is left as is; it is always written before read."""
    self._state = 0
    self.position = 0
    self.filled = False

  @property
  def storage_size(self) -> int:
    return HEADER_SIZE + self.window_size

  def digest(self) -> int:
    return self._state

  def add_byte(self, byte: int) -> int:
    if not 0 <= byte <= 0xFF:
      raise ByteValueError(f'byte value out of range: {byte!r}')

    window_size = self.window_size

    # An empty window has nothing to hash.
    if window_size == 0:
      return self._state

    words = self.table
    position = self.position
    state = ((self._state << 1) | (self._state >> 31)) & _MASK

    if self.filled:
      state ^= rotl32(words[self._window[position]], window_size)

    self._window[position] = byte
    position += 1

    if position == window_size:
      position = 0
      self.filled = True

    state ^= words[byte]

    self.position = position
    self._state = state

    return state

  def update(self, data: Iterable[int]) -> int:
    """Feed every byte of ``data`` and return the resulting hash."""
    for byte in data:
      self.add_byte(byte)

    return self._state

  def hashes(self, data: Iterable[int]) -> Iterator[int]:
    """Yield the hash after each byte of ``data``."""
    for byte in data:
      yield self.add_byte(byte)

  def to_bytes(self) -> bytes:
    header = _HEADER.pack(self._state, self.window_size, self.position, int(self.filled))
    return header + bytes(self._window)

  @classmethod
  def from_bytes(cls, data: bytes, table: RandomTable = DEFAULT_TABLE) -> BuzHash:
    if len(data) < HEADER_SIZE:
      raise SnapshotError(f'snapshot too short: {len(data)} bytes')

    state, window_size, position, filled = _HEADER.unpack_from(data)

    if len(data) != HEADER_SIZE + window_size:
      raise SnapshotError(
        f'snapshot of window size {window_size} must be {HEADER_SIZE + window_size} bytes, '
        f'got {len(data)}'
      )

    if filled not in (0, 1):
      raise SnapshotError(f'invalid filled flag: {filled}')

    if window_size and position >= window_size:
      raise SnapshotError(f'position {position} outside window of {window_size} bytes')

    if window_size == 0 and (position or filled or state):
      raise SnapshotError('empty window snapshot must hold the empty state')

    engine = cls(window_size, table)
    engine._state = state
    engine.position = position
    engine.filled = bool(filled)
    engine._window[:] = data[HEADER_SIZE:]

    return engine

  def __repr__(self) -> str:
    return (
      f'{type(self).__name__}(window_size={self.window_size}, position={self.position}, '
      f'filled={self.filled}, digest=0x{self._state:08x})'
    )


def buzhash(
  data: bytes, window_size: int | None = None, table: RandomTable = DEFAULT_TABLE
) -> int:
  """Hash ``data`` in one go. The window defaults to the length of ``data``."""
  engine = BuzHash(len(data) if window_size is None else window_size, table)
  return engine.update(data)
