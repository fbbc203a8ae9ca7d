import numpy as np
import pytest

from cachesim.render.transform import Transform


class _RecordingShader:
    def __init__(self):
        self.calls = []

    def set(self, name, data):
        self.calls.append((name, data))
        return True


class _FakeEngine:
    def __init__(self):
        self.shader = _RecordingShader()


def _plain():
    return Transform((0, 0, 0), (1, 1, 1), (0, 0, 0))


def test_name_is_transform():
    assert _plain().name == "Transform"


def test_neutral_transform_is_identity():
    assert np.allclose(_plain().matrix, np.eye(4))


def test_translation_lands_in_last_column():
    t = Transform((1040, 0, 50), (1, 1, 1), (0, 0, 0))
    assert np.allclose(t.matrix[:3, 3], [1040, 0, 50])


def test_scale_lands_on_diagonal_without_rotation():
    t = Transform((0, 0, 0), (400, 960, 1), (0, 0, 0))
    assert np.allclose(np.diag(t.matrix), [400, 960, 1, 1])


def test_quarter_turn_maps_x_axis_to_y_axis():
    t = Transform((0, 0, 0), (1, 1, 1), (0, 0, 90))
    assert np.allclose(t.matrix @ np.array([1, 0, 0, 1]), [0, 1, 0, 1], atol=1e-6)


def test_scale_applies_before_translation():
    t = Transform((10, 20, 0), (2, 3, 1), (0, 0, 0))
    point = t.matrix @ np.array([1, 1, 0, 1])
    assert np.allclose(point[:3], [10 + 2, 20 + 3, 0])


def test_setting_position_updates_matrix():
    t = _plain()
    t.position = (5, 6, 7)
    assert np.allclose(t.position, [5, 6, 7])
    assert np.allclose(t.matrix[:3, 3], [5, 6, 7])


def test_setting_scale_updates_matrix():
    t = _plain()
    t.scale = (4, 5, 1)
    assert np.allclose(np.diag(t.matrix)[:3], [4, 5, 1])


def test_setting_rotation_is_reflected():
    t = _plain()
    t.rotation = (0, 0, 90)
    assert np.allclose(t.rotation, [0, 0, 90])
    assert np.allclose(t.matrix @ np.array([1, 0, 0, 1]), [0, 1, 0, 1], atol=1e-6)


def test_move_accumulates():
    t = Transform((1, 2, 3), (1, 1, 1), (0, 0, 0))
    t.move((1, 1, 1))
    t.move((1, 1, 1))
    assert np.allclose(t.position, [3, 4, 5])


def test_move_by_zero_keeps_matrix():
    t = Transform((1, 2, 3), (2, 2, 2), (0, 0, 30))
    before = t.matrix
    t.move((0, 0, 0))
    assert np.array_equal(t.matrix, before)


def test_returned_vectors_are_copies():
    t = _plain()
    t.position[0] = 99
    assert np.allclose(t.position, [0, 0, 0])


def test_rejects_wrong_shape():
    with pytest.raises(ValueError):
        Transform((0, 0), (1, 1, 1), (0, 0, 0))


def test_bind_sends_model_matrix():
    engine = _FakeEngine()
    t = Transform((3, 4, 0), (1, 1, 1), (0, 0, 0))
    t.bind(engine)
    assert len(engine.shader.calls) == 1
    name, data = engine.shader.calls[0]
    assert name == "m_model"
    assert np.array_equal(data, t.matrix)