import struct

import pytest

from cachesim.app import App, flip_word, main, read_addresses, resolve_input
from cachesim.backend import Frontend, RandomBackend
from cachesim.simulator import Simulator


class CountingFrontend(Frontend):
    def __init__(self, limit):
        self.limit = limit
        self.seen = []

    def tick(self, backend, addrs):
        self.seen.append(backend.process(addrs.popleft()).orig)

    def halted(self):
        return len(self.seen) >= self.limit


def test_flip_word_swaps_bytes():
    assert flip_word(0x12345678) == 0x78563412


@pytest.mark.parametrize("word", [0, 1, 0xFF, 0xDEADBEEF, 0xFFFFFFFF])
def test_flip_word_is_an_involution(word):
    assert flip_word(flip_word(word)) == word


@pytest.mark.parametrize("word", [-1, 1 << 32])
def test_flip_word_rejects_out_of_range(word):
    with pytest.raises(ValueError):
        flip_word(word)


def test_read_addresses_is_big_endian(tmp_path):
    trace = tmp_path / "trace.bin"
    trace.write_bytes(b"\x00\x00\x00\x01\x12\x34\x56\x78")
    assert read_addresses(trace) == [1, 0x12345678]


def test_read_addresses_round_trip(tmp_path):
    values = [0, 42, 0xCAFEBABE, 0xFFFFFFFF]
    trace = tmp_path / "trace.bin"
    trace.write_bytes(b"".join(struct.pack(">I", v) for v in values))
    assert read_addresses(trace) == values


def test_read_addresses_drops_partial_word(tmp_path):
    trace = tmp_path / "trace.bin"
    trace.write_bytes(struct.pack(">I", 9) + b"\x01\x02")
    assert read_addresses(trace) == [9]


def test_read_addresses_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_addresses(tmp_path / "absent.bin")


def test_resolve_input_prefers_existing_file(tmp_path):
    (tmp_path / "trace.bin").write_bytes(b"")
    assert resolve_input("trace.bin", tmp_path) == tmp_path / "trace.bin"


def test_resolve_input_falls_back_to_assets_inputs(tmp_path):
    assert resolve_input("trace.bin", tmp_path) == tmp_path / "assets" / "inputs" / "trace.bin"


def test_run_ticks_until_frontend_halts():
    frontend = CountingFrontend(limit=3)
    app = App(RandomBackend(["4", "16", "2"], seed=5), frontend, [10, 20, 30, 40])
    app.run()
    assert frontend.seen == [10, 20, 30]
    assert list(app.addrs) == [40]


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    shaders = tmp_path / "assets" / "shaders"
    shaders.mkdir(parents=True)
    (shaders / "2d.vert").write_text("void main() {}\n")
    (shaders / "2d.frag").write_text("void main() {}\n")
    meshes = tmp_path / "assets" / "meshes"
    meshes.mkdir()
    (meshes / "square.csv").write_text("0,0,0\n1,0,0\n1,1,0\n")
    inputs = tmp_path / "assets" / "inputs"
    inputs.mkdir()
    (inputs / "trace.bin").write_bytes(struct.pack(">II", 5, 6))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_from_command_builds_app(workdir):
    app = App.from_command(["cachesim", "4", "16", "2", "0", "2", "trace.bin"])
    assert list(app.addrs) == [5, 6]
    assert (app.backend.specs.nsets, app.backend.specs.block, app.backend.specs.assoc) == (4, 16, 2)
    assert isinstance(app.frontend, Simulator)
    assert app.frontend.halted() is False


def test_from_command_needs_trace_argument(workdir):
    with pytest.raises(IndexError):
        App.from_command(["cachesim", "4", "16", "2", "0", "2"])


def test_main_reports_usage_for_missing_arguments(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().err


def test_main_rejects_non_numeric_frontend(workdir):
    assert main(["4", "16", "2", "0", "x", "trace.bin"]) == 2