import numpy as np
import pytest

from skygame.camera import CAMERA_START_LOCATION, Z_NEAR, Camera, look_at


def test_starts_at_start_location():
    camera = Camera(1280, 720)
    assert np.allclose(camera.location, CAMERA_START_LOCATION)


def test_projection_aspect_and_fixed_entries():
    camera = Camera(200, 100)
    assert camera.aspect == pytest.approx(200 / 100)
    proj = camera.projection
    assert proj[0, 0] * camera.aspect == pytest.approx(proj[1, 1])
    assert proj[2, 2] == -1.0
    assert proj[3, 2] == -1.0
    assert proj[2, 3] == pytest.approx(-2.0 * Z_NEAR)
    assert proj[3, 3] == 0.0


def test_near_plane_maps_to_minus_one():
    camera = Camera(640, 480)
    clip = camera.projection @ np.array([0.0, 0.0, -Z_NEAR, 1.0])
    assert clip[2] / clip[3] == pytest.approx(-1.0)


def test_set_projection_updates_aspect():
    camera = Camera(100, 100)
    camera.set_projection(300, 100)
    assert camera.aspect == pytest.approx(300 / 100)


def test_invalid_screen_size():
    with pytest.raises(ValueError):
        Camera(100, 0)


def test_update_averages_and_keeps_height():
    camera = Camera(100, 100)
    camera.update([(2.0, 4.0, 50.0)])
    assert camera.location[0] == pytest.approx(2.0 / 2)
    assert camera.location[1] == pytest.approx(4.0 / 2)
    assert camera.location[2] == pytest.approx(CAMERA_START_LOCATION[2])


def test_update_without_points_keeps_location():
    camera = Camera(100, 100)
    camera.update([])
    assert np.allclose(camera.location, CAMERA_START_LOCATION)


def test_bounds_clamp_location():
    camera = Camera(100, 100)
    camera.set_bounds((3.0, 5.0))
    camera.update([(1000.0, 1000.0, 0.0)])
    assert camera.location[0] == pytest.approx(3.0)
    assert camera.location[1] == pytest.approx(5.0)
    camera.update([(-1000.0, -1000.0, 0.0)])
    assert camera.location[0] == pytest.approx(0.0)
    assert camera.location[1] == pytest.approx(0.0)


def test_world_to_view_moves_camera_to_origin():
    camera = Camera(100, 100)
    camera.update([(6.0, 8.0, 0.0)])
    view = camera.world_to_view()
    eye = np.append(camera.location, 1.0)
    assert np.allclose(view @ eye, [0.0, 0.0, 0.0, 1.0])
    ground = np.array([camera.location[0], camera.location[1], 0.0, 1.0])
    assert np.allclose(view @ ground, [0.0, 0.0, -camera.location[2], 1.0])


def test_world_to_projection_is_product():
    camera = Camera(320, 200)
    assert np.allclose(camera.world_to_projection(), camera.projection @ camera.world_to_view())


def test_look_at_rotation_is_orthonormal():
    view = look_at((1.0, 2.0, 3.0), (4.0, -1.0, 0.5), (0.0, 1.0, 0.0))
    rotation = view[:3, :3]
    assert np.allclose(rotation @ rotation.T, np.identity(3))


def test_look_at_rejects_same_points():
    with pytest.raises(ValueError):
        look_at((1.0, 1.0, 1.0), (1.0, 1.0, 1.0), (0.0, 1.0, 0.0))