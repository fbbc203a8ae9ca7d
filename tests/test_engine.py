import numpy as np
import pytest

from cachesim.render.color import Color
from cachesim.render.engine import Z_FAR, Z_NEAR, Engine, ortho
from cachesim.render.mesh import Mesh
from cachesim.render.object import Object
from cachesim.render.shader import Shader
from cachesim.render.transform import Transform


@pytest.fixture
def engine():
    return Engine(1440, 960)


@pytest.fixture
def shader():
    return Shader("vertex", "fragment")


@pytest.fixture
def mesh():
    return Mesh([0, 0, 0, 1, 0, 0, 0, 1, 0])


def test_ortho_maps_box_corners_to_unit_cube():
    m = ortho(0.0, 1440.0, 0.0, 960.0, Z_NEAR, -Z_FAR)
    low = m @ np.array([0.0, 0.0, Z_NEAR, 1.0])
    high = m @ np.array([1440.0, 960.0, -Z_FAR, 1.0])
    assert np.allclose(low, [-1, -1, -1, 1])
    assert np.allclose(high, [1, 1, 1, 1])


def test_ortho_centre_maps_to_origin():
    m = ortho(-3.0, 5.0, 2.0, 10.0, 1.0, 9.0)
    centre = m @ np.array([1.0, 6.0, -5.0, 1.0])
    assert np.allclose(centre[:3], 0.0)


def test_initial_projection_matches_screen(engine):
    assert np.allclose(engine.projection, ortho(0, 1440, 0, 960, Z_NEAR, -Z_FAR))


def test_object_registers_and_returns_new_object(engine, shader, mesh):
    obj = engine.object(shader, mesh)
    assert obj.shader is shader
    assert obj.mesh is mesh
    assert list(engine) == [obj]
    assert len(engine) == 1


def test_add_object_without_window_does_not_draw(engine, shader, mesh):
    obj = Object(shader, mesh)
    engine.add_object(obj)
    assert list(engine) == [obj]
    assert not engine.halted()


def test_add_object_needs_shader_and_mesh(engine, mesh):
    with pytest.raises(ValueError):
        engine.add_object(Object(None, mesh))


def test_objects_are_grouped_by_shader(engine, mesh):
    first = Shader("a", "b")
    second = Shader("c", "d")
    a = engine.object(first, mesh)
    b = engine.object(second, mesh)
    c = engine.object(first, mesh)
    assert list(engine) == [a, c, b]


def test_rmv_object_removes_only_that_object(engine, shader, mesh):
    a = engine.object(shader, mesh)
    b = engine.object(shader, mesh)
    engine.rmv_object(a)
    assert list(engine) == [b]
    engine.rmv_object(b)
    assert len(engine) == 0


def test_rmv_object_ignores_unknown(engine, shader, mesh):
    kept = engine.object(shader, mesh)
    engine.rmv_object(Object(shader, mesh))
    engine.rmv_object(Object(Shader("x", "y"), mesh))
    assert list(engine) == [kept]


def test_set_view_updates_projection_and_notifies(engine, shader, mesh):
    seen = []
    obj = engine.object(shader, mesh)
    obj.on_resize = lambda self, window: seen.append((self, window))
    engine.object(shader, mesh)

    engine.set_view(800, 600)
    assert seen == [(obj, (800, 600))]
    assert (engine.width, engine.height) == (800, 600)
    assert np.allclose(engine.projection, ortho(0, 800, 0, 600, Z_NEAR, -Z_FAR))


def test_resize_handler_can_reposition_sidebar(engine, shader, mesh):
    sidebar = engine.object(shader, mesh)
    sidebar.add_component(Transform([1040, 0, 50], [400, 960, 1], [0, 0, 0]))
    sidebar.add_component(Color.from_hex(0x181818FF))

    def follow(self, window):
        t = self.get_component("Transform")
        pos, scale = t.position, t.scale
        pos[0] = window[0] - scale[0]
        scale[1] = window[1]
        t.position = pos
        t.scale = scale

    sidebar.on_resize = follow
    engine.set_view(1000, 700)
    t = sidebar.get_component("Transform")
    assert t.position.tolist() == [600.0, 0.0, 50.0]
    assert t.scale.tolist() == [400.0, 700.0, 1.0]


def test_close_halts_engine(engine):
    assert not engine.halted()
    engine.close()
    assert engine.halted()


def test_context_manager_closes(shader, mesh):
    with Engine(640, 480) as engine:
        engine.object(shader, mesh)
        assert not engine.halted()
    assert engine.halted()