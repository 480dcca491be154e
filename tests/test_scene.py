"""Tests for Scene and nearest-hit selection."""

import pytest
from minitracer.vec3 import Vec3, Point3
from minitracer.ray import Ray
from minitracer.camera import Camera, CameraSettings
from minitracer.shapes import Sphere, Plane
from minitracer.scene import Scene, create_default_scene


@pytest.fixture
def camera():
    return Camera(Point3(0, 0, 0), Point3(0, 0, -1), 1.0)


class TestSceneCreation:
    """Test Scene construction."""

    def test_empty(self, camera):
        scene = Scene(camera)
        assert len(scene) == 0
        assert scene.camera is camera

    def test_keeps_order(self, camera):
        a = Sphere(Point3(0, 0, -5), 1.0)
        b = Plane(Point3(0, -1, 0), Vec3(0, 1, 0))
        scene = Scene(camera, [a, b])
        assert scene.objects == (a, b)
        assert list(scene) == [a, b]

    def test_rejects_unknown_primitive(self, camera):
        with pytest.raises(TypeError):
            Scene(camera, [object()])

    def test_objects_are_immutable(self, camera):
        scene = Scene(camera, [Sphere(Point3(0, 0, -5), 1.0)])
        with pytest.raises(AttributeError):
            scene.objects.append(Sphere(Point3(0, 0, -9), 1.0))

    def test_with_camera(self, camera):
        scene = Scene(camera, [Sphere(Point3(0, 0, -5), 1.0)])
        other = Camera(Point3(0, 0, 1), Point3(0, 0, -1), 2.0)
        moved = scene.with_camera(other)
        assert moved.camera is other
        assert moved.objects == scene.objects
        assert scene.camera is camera


class TestSceneIntersect:
    """Test Scene.intersect()."""

    def test_empty_scene_misses(self, camera):
        scene = Scene(camera)
        assert scene.intersect(Ray(Point3(0, 0, 0), Vec3(0, 0, -1))) is None

    def test_hits_second_sphere(self, camera):
        first = Sphere(Point3(0, 0, -5), 1.0)
        second = Sphere(Point3(3, 0, -5), 1.0)
        scene = Scene(camera, [first, second])

        direction = (second.center - Point3(0, 0, 0)).normalize()
        hit = scene.intersect(Ray(Point3(0, 0, 0), direction))

        assert hit is not None
        assert hit == second.intersect(Ray(Point3(0, 0, 0), direction))
        assert (hit.position - second.center).length() == pytest.approx(1.0)

    def test_nearest_wins_regardless_of_order(self, camera):
        far = Sphere(Point3(0, 0, -10), 1.0)
        near = Sphere(Point3(0, 0, -5), 1.0)
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))

        for objects in ([far, near], [near, far]):
            hit = Scene(camera, objects).intersect(ray)
            assert hit is not None
            assert hit.distance == pytest.approx(4.0)

    def test_sphere_in_front_of_plane(self, camera):
        sphere = Sphere(Point3(0, 0, -5), 1.0)
        wall = Plane(Point3(0, 0, -8), Vec3(0, 0, 1))
        hit = Scene(camera, [wall, sphere]).intersect(Ray(Point3(0, 0, 0), Vec3(0, 0, -1)))

        assert hit is not None
        assert hit.distance == pytest.approx(4.0)
        assert hit.normal == Vec3(0, 0, 1)

    def test_tie_keeps_first_listed(self, camera):
        # Both surfaces are hit at exactly t = 4 with different normals
        sphere = Sphere(Point3(0, 0, -5), 1.0)
        tilted = Plane(Point3(0, 0, -4), Vec3(0, 1, 1).normalize())
        ray = Ray(Point3(0, 0, 0), Vec3(0, 0, -1))

        hit = Scene(camera, [sphere, tilted]).intersect(ray)
        assert hit.normal == Vec3(0, 0, 1)

        hit = Scene(camera, [tilted, sphere]).intersect(ray)
        assert hit.normal == tilted.normal


class TestDefaultScene:
    """Test create_default_scene()."""

    def test_contents(self):
        scene = create_default_scene()
        spheres = [obj for obj in scene if isinstance(obj, Sphere)]
        planes = [obj for obj in scene if isinstance(obj, Plane)]

        assert len(spheres) == 2
        assert len(planes) == 1
        assert scene.camera.position == Point3(0, 2, -4)
        assert scene.camera.aspect_ratio == pytest.approx(16 / 9)

    def test_custom_settings(self):
        settings = CameraSettings(vfov=60.0)
        scene = create_default_scene(1.0, settings)
        assert scene.camera.settings is settings
        assert scene.camera.aspect_ratio == 1.0
