# cachesim

`cachesim` reads a trace of 32-bit memory addresses, hands them to a cache
back end and shows a window drawn with OpenGL (through pyglet).

## Installing

```
pip install .
```

The test suite needs the `test` extra:

```
pip install .[test]
pytest
```

## Running

```
cachesim NSETS BLOCK ASSOC POLICY FRONTEND TRACE
```

- `NSETS` – number of sets in the cache (a positive integer).
- `BLOCK` – block size in bytes (a positive integer).
- `ASSOC` – associativity.
- `POLICY` – a fourth back-end argument; it is accepted but not used.
- `FRONTEND` – front-end identifier, an integer. Every value currently
  selects the graphical `Simulator`.
- `TRACE` – the address trace file.

Missing or malformed arguments print a usage line and exit with status 2; a
trace that cannot be read exits with status 1. The window runs until it is
closed or Escape is pressed; every key press is printed to standard output.

The cache is described with 32-bit addresses. From `NSETS` and `BLOCK`,
`CacheSpecs` derives the index, offset and tag widths (`CacheSpecs.bits`).

### Trace files

A trace is a binary file of 32-bit addresses stored big-endian, one after
another; a trailing partial word is ignored. `TRACE` is looked up relative to
the current directory first and, if it is not there, in `assets/inputs`
(`cachesim.app.resolve_input`).

### Assets

Shaders and meshes are loaded by `AssetManager`, by default from an `assets`
directory in the current working directory:

- `assets/shaders/<name>.vert` and `assets/shaders/<name>.frag`
- `assets/meshes/<name>.csv` – coordinates separated by commas or newlines,
  three per vertex; lines starting with `#` are comments and a leading `+`
  is allowed.

The simulator needs the `2d` shader and the `square` mesh; they are not
shipped with the package. The engine sets the uniforms `m_projection` and
`m_model` (4x4 matrices) and `v_color` (a vec4), and the mesh feeds vertex
positions to attribute location 0. A missing asset file raises
`AssetNotFound`. Textures cannot be loaded from disk: `get_texture` raises
`AssetNotImplemented` for any name not registered in `AssetManager.textures`.

### Window

The window opens at 1440×960 with a dark sidebar on the right and a panel
along the bottom. Resizing keeps the sidebar on the right edge at full height
and stretches the bottom panel across the full width.

## What it does not do

- There is no real cache model. The only back end, `RandomBackend`, answers
  every access with a random block and a random `AccessResult`, `report()`
  returns an empty `CacheReport`, and it never halts. `Replacement` is
  defined but no back end uses it.
- The window does not show accesses. `Simulator.tick` passes the address at
  the front of the queue to the back end (without removing it), keeps the
  answer in `Simulator.last_access` and redraws the two panels.
- No statistics are printed at the end of a run.

## Using it from Python

```python
from cachesim.app import App

app = App.from_command(["cachesim", "64", "32", "2", "0", "2", "trace.bin"])
app.run()
```

Or build the pieces yourself:

```python
from cachesim.app import App, read_addresses
from cachesim.backend import RandomBackend
from cachesim.simulator import Simulator

backend = RandomBackend(["64", "32", "2"], seed=1)
app = App(backend, Simulator(), read_addresses("trace.bin"))
app.run()
```

Modules:

- `cachesim.model` – `CacheSpecs`, `CacheBits`, `CacheAccess`,
  `CacheReport`, `AccessResult` and `Replacement`.
- `cachesim.backend` – the `Backend` and `Frontend` interfaces and
  `RandomBackend`.
- `cachesim.tqueue` – `ThreadSafeQueue`, a FIFO with `push`, `try_pop`,
  `empty` and a blocking `wait_and_pop` that stops when its stop condition
  turns true.
- `cachesim.app` – `App`, `main`, `flip_word`, `read_addresses` and
  `resolve_input`.
- `cachesim.simulator` – `Simulator`, the graphical front end.
- `cachesim.render.engine` – `Engine`, which owns the window and draws
  objects grouped by shader and mesh, and `ortho`.
- `cachesim.render.object` – `Object`, a shader, a mesh and named components.
- `cachesim.render.assets` – `AssetManager` and `parse_mesh_csv`.
- `cachesim.render.component`, `color`, `transform`, `mesh`, `shader` – the
  `Component` base and the `Texture`, `Color`, `Transform`, `Mesh` (with
  `index_vertices`) and `Shader` (with `check_gl_errors`) components.
- `cachesim.render.debug` – `gl_type_to_string` and `dump_gl_state`, which
  prints and returns a description of the current GL state.

Meshes and shaders create their GL objects only when first bound, so they can
be built and inspected without a window.