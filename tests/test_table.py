from __future__ import annotations

import hashlib

import pytest

from pybuzhash.error import TableError
from pybuzhash.table import DEFAULT_TABLE, TABLE_SIZE_BYTES, RandomTable

TABLE_SHA256 = 'ef288a2ec19d5544fe26a0fcc819af80db9bfc83fe79ddec21733cbf043bd22c'


def test_default_table_has_one_word_per_byte() -> None:
  assert len(DEFAULT_TABLE) == 256
  assert all(0 <= word <= 0xFFFFFFFF for word in DEFAULT_TABLE)


def test_default_table_known_entries() -> None:
  assert DEFAULT_TABLE.contribution(0x00) == 0x12BD9527
  assert DEFAULT_TABLE.contribution(0x01) == 0xF4140CEA
  assert DEFAULT_TABLE.contribution(0x41) == 0x503B7F42
  assert DEFAULT_TABLE.contribution(ord('a')) == 0x9F3AF3D2
  assert DEFAULT_TABLE.contribution(ord('b')) == 0x774D1061
  assert DEFAULT_TABLE.contribution(0xFF) == 0x8185F4D2


def test_default_table_bytes_match_fixed_asset() -> None:
  data = DEFAULT_TABLE.to_bytes()

  assert len(data) == TABLE_SIZE_BYTES == 1024
  assert data[:8] == bytes([0x27, 0x95, 0xBD, 0x12, 0xEA, 0x0C, 0x14, 0xF4])
  assert hashlib.sha256(data).hexdigest() == TABLE_SHA256


def test_default_table_words_xor_to_known_value() -> None:
  folded = 0
  for word in DEFAULT_TABLE:
    folded ^= word

  assert folded == 0xF9ED8810


def test_from_bytes_restores_table() -> None:
  restored = RandomTable.from_bytes(DEFAULT_TABLE.to_bytes())

  assert restored == DEFAULT_TABLE
  assert list(restored) == list(DEFAULT_TABLE)


def test_from_bytes_rejects_wrong_length() -> None:
  with pytest.raises(TableError):
    RandomTable.from_bytes(b'\x00' * 1023)


@pytest.mark.parametrize(
  'words',
  [
    [0] * 255,
    [0] * 257,
    [0] * 255 + [1 << 32],
    [0] * 255 + [-1],
  ],
)
def test_constructor_rejects_invalid_words(words: list[int]) -> None:
  with pytest.raises(TableError):
    RandomTable(words)


def test_table_is_read_only() -> None:
  with pytest.raises((TypeError, AttributeError)):
    DEFAULT_TABLE[0] = 1  # type: ignore[index]
