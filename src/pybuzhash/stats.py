from dataclasses import dataclass


@dataclass(frozen=True)
class ScanStats:
  bytes_scanned: int
  candidates: int
  matches: int

  @property
  def collisions(self) -> int:
    return max(self.candidates - self.matches, 0)
