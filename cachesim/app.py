"""Command-line entry: read an address trace and run it through a front end."""

from __future__ import annotations

import struct
import sys
from collections import deque
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Union

from cachesim.backend import Backend, Frontend, RandomBackend
from cachesim.simulator import Simulator

_SEP = 5
_WORD = struct.Struct(">I")
_USAGE = "usage: cachesim NSETS BLOCK ASSOC POLICY FRONTEND TRACE"

_FRONTENDS: Dict[int, Callable[[], Frontend]] = {2: Simulator}


def flip_word(word: int) -> int:
    """Reverse the byte order of a 32-bit word."""
    if not 0 <= word <= 0xFFFFFFFF:
        raise ValueError(f"{word} does not fit in 32 bits")
    return int.from_bytes(word.to_bytes(4, "little"), "big")


def read_addresses(path: Union[str, Path]) -> List[int]:
    """Read a trace of big-endian 32-bit addresses; trailing partial words are dropped."""
    data = Path(path).read_bytes()
    usable = len(data) - len(data) % _WORD.size
    return [addr for (addr,) in _WORD.iter_unpack(data[:usable])]


def resolve_input(path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> Path:
    """Locate a trace file relative to ``root``, falling back to ``assets/inputs``."""
    base = Path(root) if root is not None else Path.cwd()
    candidate = base / path
    if candidate.exists():
        return candidate
    return candidate.parent / "assets" / "inputs" / path


def _frontend_for(ident: str) -> Callable[[], Frontend]:
    return _FRONTENDS.get(int(ident), Simulator)


class App:
    """Feeds addresses to a back end through a front end until it halts."""

    def __init__(self, backend: Backend, frontend: Frontend, addrs: Iterable[int]) -> None:
        self.backend = backend
        self.frontend = frontend
        self.addrs: deque = deque(addrs)

    @classmethod
    def from_command(cls, command: Sequence[str]) -> "App":
        """Build an app from a full command line, program name first.

        Items 1-4 configure the back end, item 5 selects the front end and
        item 6 names the trace file.
        """
        backend = RandomBackend(list(command[1:_SEP]))
        make_frontend = _frontend_for(command[_SEP])
        addrs = read_addresses(resolve_input(command[_SEP + 1]))
        return cls(backend, make_frontend(), addrs)

    def run(self) -> None:
        """Tick the front end until it reports that it has halted."""
        while not self.frontend.halted():
            self.frontend.tick(self.backend, self.addrs)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        app = App.from_command(["cachesim", *args])
    except (IndexError, ValueError) as exc:
        print(f"{_USAGE}\n{exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"cachesim: {exc}", file=sys.stderr)
        return 1
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())