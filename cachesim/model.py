"""Plain data types shared by cache back ends and front ends."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass


class AccessResult(enum.IntEnum):
    """Outcome of a single cache access."""

    HIT = 0
    COMPULSORY_MISS = 1
    CONFLICT_MISS = 2
    CAPACITY_MISS = 3
    UNKNOWN = 4


class Replacement(enum.Enum):
    """Block replacement policy."""

    LRU = enum.auto()
    FIFO = enum.auto()
    RANDOM = enum.auto()


@dataclass
class CacheAccess:
    """What happened when one address was looked up in the cache."""

    orig: int = 0
    block: int = 0
    res: AccessResult = AccessResult.UNKNOWN


@dataclass(frozen=True)
class CacheReport:
    """Summary statistics of a simulation run."""

    accesses: int = 0
    miss_rate: float = 0.0
    hit_rate: float = 0.0
    compulsory_miss_rate: float = 0.0
    capacity_miss_rate: float = 0.0
    conflict_miss_rate: float = 0.0


@dataclass(frozen=True)
class CacheBits:
    """How many address bits go to the index, the offset and the tag."""

    index: int
    offset: int
    tag: int


@dataclass(frozen=True, init=False)
class CacheSpecs:
    """Geometry of a cache and the address split it implies."""

    nsets: int
    block: int
    assoc: int
    bits: CacheBits

    def __init__(self, addr_size: int, nsets: int, block: int, assoc: int) -> None:
        if nsets <= 0:
            raise ValueError(f"number of sets must be positive, got {nsets}")
        if block <= 0:
            raise ValueError(f"block size must be positive, got {block}")
        index_bits = math.log2(nsets)
        offset_bits = math.log2(block)
        object.__setattr__(self, "nsets", nsets)
        object.__setattr__(self, "block", block)
        object.__setattr__(self, "assoc", assoc)
        object.__setattr__(
            self,
            "bits",
            CacheBits(
                index=int(index_bits),
                offset=int(offset_bits),
                tag=int(addr_size - index_bits - offset_bits),
            ),
        )