"""Set-associative and fully associative cache simulators with FIFO replacement."""

from __future__ import annotations

import math
import re
import sys
from collections import deque
from typing import Optional, TextIO

VALID = 1 << 63
DIRTY = 1 << 62
_MASK64 = (1 << 64) - 1

_HELP = (
    "Cache configurations must be of the form sets:ways:blocksize, "
    "where sets, ways, and blocksize are positive integers, with "
    "sets and blocksize both powers of two and blocksize at least 8."
)


class CacheConfigError(ValueError):
    """Raised for a cache geometry or configuration string that cannot be used."""


def _is_power_of_two(value: int) -> bool:
    return value > 0 and value & (value - 1) == 0


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


class Lfsr:
    """32-bit Galois linear feedback shift register."""

    def __init__(self) -> None:
        self._reg = 1

    def next(self) -> int:
        feedback = 0xD0000001 if self._reg & 1 else 0
        self._reg = (self._reg >> 1) ^ feedback
        return self._reg


class CacheSim:
    """A write-back, write-allocate cache with per-set FIFO replacement."""

    def __init__(self, sets: int, ways: int, linesz: int, name: str) -> None:
        if not _is_power_of_two(sets):
            raise CacheConfigError(_HELP)
        if ways < 1:
            raise CacheConfigError(_HELP)
        if linesz < 8 or not _is_power_of_two(linesz):
            raise CacheConfigError(_HELP)

        self.sets = sets
        self.ways = ways
        self.linesz = linesz
        self.name = name
        self.idx_shift = linesz.bit_length() - 1
        self.miss_handler: Optional[CacheSim] = None
        self.log = False
        self.lfsr = Lfsr()

        self.read_accesses = 0
        self.read_misses = 0
        self.bytes_read = 0
        self.write_accesses = 0
        self.write_misses = 0
        self.bytes_written = 0
        self.writebacks = 0

        self._init_storage()

    def _init_storage(self) -> None:
        self._tags = [0] * (self.sets * self.ways)
        self._fifo = [deque() for _ in range(self.sets)]

    def _set_index(self, addr: int) -> int:
        return (addr >> self.idx_shift) & (self.sets - 1)

    def _find(self, addr: int):
        """Return the slot holding the line for ``addr``, or None on a miss."""
        base = self._set_index(addr) * self.ways
        tag = (addr >> self.idx_shift) | VALID
        for slot in range(base, base + self.ways):
            if self._tags[slot] & ~DIRTY == tag:
                return slot
        return None

    def _victimize(self, addr: int) -> int:
        """Install the line for ``addr`` and return the tag it displaced."""
        idx = self._set_index(addr)
        base = idx * self.ways
        queue = self._fifo[idx]
        new_tag = (addr >> self.idx_shift) | VALID

        if len(queue) < self.ways:
            for way in range(self.ways):
                if not self._tags[base + way] & VALID:
                    queue.append(way)
                    self._tags[base + way] = new_tag
                    return 0

        way = queue.popleft()
        queue.append(way)
        victim = self._tags[base + way]
        self._tags[base + way] = new_tag
        return victim

    def access(self, addr: int, nbytes: int, store: bool) -> None:
        """Simulate a load or store of ``nbytes`` bytes at ``addr``."""
        addr &= _MASK64
        if store:
            self.write_accesses += 1
            self.bytes_written += nbytes
        else:
            self.read_accesses += 1
            self.bytes_read += nbytes

        slot = self._find(addr)
        if slot is not None:
            if store:
                self._tags[slot] |= DIRTY
            return

        if store:
            self.write_misses += 1
        else:
            self.read_misses += 1
        if self.log:
            kind = "write" if store else "read"
            print(f"{self.name} {kind} miss 0x{addr:x}", file=sys.stderr)

        victim = self._victimize(addr)
        if victim & (VALID | DIRTY) == VALID | DIRTY:
            dirty_addr = ((victim & ~(VALID | DIRTY)) << self.idx_shift) & _MASK64
            if self.miss_handler is not None:
                self.miss_handler.access(dirty_addr, self.linesz, True)
            self.writebacks += 1

        if self.miss_handler is not None:
            self.miss_handler.access(addr & ~(self.linesz - 1), self.linesz, False)

        if store:
            self._tags[self._find(addr)] |= DIRTY

    def clean_invalidate(self, addr: int, nbytes: int, clean: bool, inval: bool) -> None:
        """Clean and/or invalidate every line touching the given byte range."""
        mask = ~(self.linesz - 1)
        start = addr & mask & _MASK64
        end = (addr + nbytes + self.linesz - 1) & mask & _MASK64
        for cur in range(start, end, self.linesz):
            slot = self._find(cur)
            if slot is None:
                continue
            if clean and self._tags[slot] & DIRTY:
                self.writebacks += 1
                self._tags[slot] &= ~DIRTY
            if inval:
                self._tags[slot] &= ~VALID
        if self.miss_handler is not None:
            self.miss_handler.clean_invalidate(addr, nbytes, clean, inval)

    def miss_rate(self) -> float:
        """Percentage of accesses that missed; NaN when nothing was accessed."""
        total = self.read_accesses + self.write_accesses
        if not total:
            return math.nan
        return 100.0 * (self.read_misses + self.write_misses) / total

    def stats(self) -> dict:
        """Return the access counters as a dictionary."""
        return {
            "bytes_read": self.bytes_read,
            "bytes_written": self.bytes_written,
            "read_accesses": self.read_accesses,
            "write_accesses": self.write_accesses,
            "read_misses": self.read_misses,
            "write_misses": self.write_misses,
            "writebacks": self.writebacks,
        }

    def print_stats(self, stream: Optional[TextIO] = None) -> None:
        """Write a human-readable statistics report."""
        out = sys.stdout if stream is None else stream
        rows = [
            ("Bytes Read:", self.bytes_read),
            ("Bytes Written:", self.bytes_written),
            ("Read Accesses:", self.read_accesses),
            ("Write Accesses:", self.write_accesses),
            ("Read Misses:", self.read_misses),
            ("Write Misses:", self.write_misses),
            ("Writebacks:", self.writebacks),
        ]
        for label, value in rows:
            out.write(f"{self.name} {label:<23}{value}\n")
        out.write(f"{self.name} {'Miss Rate:':<23}{self.miss_rate():.3f}%\n")


class FullyAssociativeCacheSim(CacheSim):
    """A single-set cache whose lines are looked up by line address."""

    def __init__(self, ways: int, linesz: int, name: str) -> None:
        super().__init__(1, ways, linesz, name)

    def _init_storage(self) -> None:
        self._tags = {}
        self._fifo = deque()

    def _find(self, addr: int):
        key = addr >> self.idx_shift
        return key if key in self._tags else None

    def _victimize(self, addr: int) -> int:
        key = addr >> self.idx_shift
        old_tag = 0
        if len(self._tags) == self.ways:
            victim_key = self._fifo.popleft()
            old_tag = self._tags.pop(victim_key)
        self._tags[key] = key | VALID
        self._fifo.append(key)
        return old_tag


def parse_config(config: str) -> tuple:
    """Split a ``sets:ways:blocksize`` string into three integers."""
    parts = config.split(":", 2)
    if len(parts) < 3:
        raise CacheConfigError(_HELP)
    sets, ways, linesz = (_atoi(part) for part in parts)
    return sets, ways, linesz


def construct(config: str, name: str) -> CacheSim:
    """Build a cache from a configuration string."""
    sets, ways, linesz = parse_config(config)
    if ways > 4 and sets == 1:
        return FullyAssociativeCacheSim(ways, linesz, name)
    return CacheSim(sets, ways, linesz, name)