import math

import pytest

from exastitch.camera import Camera, create_camera


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def _len(a):
    return math.sqrt(_dot(a, a))


def test_create_perspective():
    cam = create_camera("perspective")
    assert isinstance(cam, Camera)
    assert cam.dir == (0.0, 0.0, 1.0)


def test_unsupported_subtype():
    with pytest.raises(ValueError):
        create_camera("orthographic")


def test_direction_is_normalized():
    cam = Camera()
    cam.commit(direction=(0.0, 0.0, 5.0), up=(0.0, 3.0, 0.0))
    assert _len(cam.dir) == pytest.approx(1.0)
    assert _len(cam.up) == pytest.approx(1.0)


def test_image_plane_is_orthogonal_to_direction():
    cam = Camera()
    cam.commit(position=(1.0, 2.0, 3.0), direction=(1.0, 1.0, 0.0), up=(0.0, 0.0, 1.0))
    assert _dot(cam.dir_du, cam.dir) == pytest.approx(0.0, abs=1e-12)
    assert _dot(cam.dir_dv, cam.dir) == pytest.approx(0.0, abs=1e-12)
    assert _dot(cam.dir_du, cam.dir_dv) == pytest.approx(0.0, abs=1e-12)


def test_center_ray_is_view_direction():
    cam = Camera()
    cam.commit(direction=(0.3, -0.2, 1.0), fovy=1.0, aspect=1.5)
    center = tuple(
        o + 0.5 * du + 0.5 * dv for o, du, dv in zip(cam.dir_00, cam.dir_du, cam.dir_dv)
    )
    assert center == pytest.approx(cam.dir)


def test_fovy_and_aspect_set_plane_size():
    cam = Camera()
    cam.commit(fovy=math.pi / 2, aspect=2.0)
    assert _len(cam.dir_dv) == pytest.approx(2.0)
    assert _len(cam.dir_du) == pytest.approx(2.0 * _len(cam.dir_dv))


def test_apply_scales_by_frame_buffer():
    cam = Camera()
    cam.commit(position=(4.0, 5.0, 6.0))
    frame = cam.apply((200, 100))
    assert frame.org == (4.0, 5.0, 6.0)
    assert frame.dir_00 == pytest.approx(cam.dir_00)
    assert tuple(c * 200 for c in frame.dir_du) == pytest.approx(cam.dir_du)
    assert tuple(c * 100 for c in frame.dir_dv) == pytest.approx(cam.dir_dv)


def test_apply_rejects_empty_frame_buffer():
    with pytest.raises(ValueError):
        Camera().apply((0, 10))


def test_zero_direction_rejected():
    with pytest.raises(ValueError):
        Camera().commit(direction=(0.0, 0.0, 0.0))


def test_direction_parallel_to_up_rejected():
    with pytest.raises(ValueError):
        Camera().commit(direction=(0.0, 1.0, 0.0), up=(0.0, 2.0, 0.0))