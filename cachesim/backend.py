"""Interfaces between a cache model and whatever presents its results."""

from __future__ import annotations

import abc
import random
from collections import deque
from typing import Optional, Sequence

from cachesim.model import AccessResult, CacheAccess, CacheReport, CacheSpecs


class Backend(abc.ABC):
    """A cache model that classifies each address it is given."""

    def __init__(self, specs: CacheSpecs) -> None:
        self.specs = specs
        self._report = CacheReport()

    @abc.abstractmethod
    def process(self, addr: int) -> CacheAccess:
        """Look up one address and describe the outcome."""

    @abc.abstractmethod
    def report(self) -> CacheReport:
        """Statistics gathered so far."""

    @abc.abstractmethod
    def halted(self) -> bool:
        """Whether the model has stopped accepting addresses."""


class RandomBackend(Backend):
    """Stand-in model that answers every access with a random outcome.

    ``command`` holds the number of sets, the block size and the
    associativity as decimal strings, in that order; further items are ignored.
    """

    ADDR_SIZE = 32

    def __init__(self, command: Sequence[str], seed: Optional[int] = None) -> None:
        super().__init__(
            CacheSpecs(self.ADDR_SIZE, int(command[0]), int(command[1]), int(command[2]))
        )
        self._rng = random.Random(seed)

    def process(self, addr: int) -> CacheAccess:
        block = self._rng.randint(1, 6)
        res = AccessResult(self._rng.randint(0, int(AccessResult.UNKNOWN)))
        return CacheAccess(orig=addr, block=block, res=res)

    def report(self) -> CacheReport:
        return self._report

    def halted(self) -> bool:
        return False


class Frontend(abc.ABC):
    """Drives a back end with addresses and presents what it answers."""

    @abc.abstractmethod
    def tick(self, backend: Backend, addrs: deque) -> None:
        """Advance by one step, feeding addresses from ``addrs`` to ``backend``."""

    @abc.abstractmethod
    def halted(self) -> bool:
        """Whether the front end has finished."""