class BuzHashError(Exception):
  """Base class for errors raised by pybuzhash."""


class WindowSizeError(BuzHashError, ValueError):
  pass


class ByteValueError(BuzHashError, ValueError):
  pass


class TableError(BuzHashError, ValueError):
  pass


class SnapshotError(BuzHashError, ValueError):
  pass


class ScanError(BuzHashError):
  pass
