from .error import (
  BuzHashError,
  ByteValueError,
  ScanError,
  SnapshotError,
  TableError,
  WindowSizeError,
)
from .rolling_hash import HEADER_SIZE, MAX_WINDOW_SIZE, BuzHash, buzhash, required_storage, rotl32
from .scan import ScanMatch, Scanner, find_phrase, scan_file, scan_stream
from .stats import ScanStats
from .table import DEFAULT_TABLE, TABLE_SIZE_BYTES, RandomTable

__all__ = [
  'BuzHash',
  'BuzHashError',
  'ByteValueError',
  'DEFAULT_TABLE',
  'HEADER_SIZE',
  'MAX_WINDOW_SIZE',
  'RandomTable',
  'ScanError',
  'ScanMatch',
  'ScanStats',
  'Scanner',
  'SnapshotError',
  'TABLE_SIZE_BYTES',
  'TableError',
  'WindowSizeError',
  'buzhash',
  'find_phrase',
  'required_storage',
  'rotl32',
  'scan_file',
  'scan_stream',
]
