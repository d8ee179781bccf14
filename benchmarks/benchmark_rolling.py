from __future__ import annotations

import argparse
import random
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path

from pybuzhash.rolling_hash import BuzHash
from pybuzhash.scan import scan_file
from pybuzhash.stats import ScanStats


def _write_random(path: Path, size_bytes: int, *, rng: random.Random) -> bytes:
  data = bytes(rng.getrandbits(8) for _ in range(size_bytes))
  path.write_bytes(data)
  return data


@dataclass(slots=True)
class BenchmarkResult:
  hash_time: float
  scan_time: float
  scan_stats: ScanStats


def run_benchmark(*, size_kb: int, window_size: int, seed: int) -> BenchmarkResult:
  size_bytes = size_kb * 1024
  rng = random.Random(seed)

  with tempfile.TemporaryDirectory() as workspace:
    source = Path(workspace) / 'source.bin'
    data = _write_random(source, size_bytes, rng=rng)

    engine = BuzHash(window_size)

    start = time.perf_counter()
    engine.update(data)
    hash_time = time.perf_counter() - start

    offset = rng.randint(0, max(size_bytes - window_size, 0))
    phrase = data[offset : offset + window_size]

    start = time.perf_counter()
    _, scan_stats = scan_file(source, phrase)
    scan_time = time.perf_counter() - start

  return BenchmarkResult(hash_time=hash_time, scan_time=scan_time, scan_stats=scan_stats)


def _rate(size_bytes: int, seconds: float) -> str:
  if seconds <= 0:
    return 'n/a'
  return f'{size_bytes / seconds / (1024 * 1024):.2f} MiB/s'


def main() -> None:
  parser = argparse.ArgumentParser(description='Benchmark the BuzHash engine and phrase scanner.')
  parser.add_argument('--size-kb', type=int, default=4096, help='Size of the input in KiB')
  parser.add_argument('--window-size', type=int, default=48, help='Rolling window in bytes')
  parser.add_argument('--seed', type=int, default=1337, help='Seed for the generated input')

  args = parser.parse_args()

  result = run_benchmark(size_kb=args.size_kb, window_size=args.window_size, seed=args.seed)
  size_bytes = args.size_kb * 1024

  print('=== BuzHash Benchmark ===')
  print(f'Input size       : {args.size_kb} KiB')
  print(f'Window size      : {args.window_size} bytes')
  print()
  print(f'Rolling hash     : {result.hash_time:.2f}s ({_rate(size_bytes, result.hash_time)})')
  print(f'Phrase scan      : {result.scan_time:.2f}s ({_rate(size_bytes, result.scan_time)})')
  print(f'  Candidates     : {result.scan_stats.candidates}')
  print(f'  Matches        : {result.scan_stats.matches}')
  print(f'  Collisions     : {result.scan_stats.collisions}')


if __name__ == '__main__':
  main()
