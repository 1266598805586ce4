import math
import unittest

from posescore.geometry import (
    distance,
    is_landmark_visible,
    joint_angle,
    midpoint,
    rotate_around_vertical_axis,
    scale,
    translate,
)
from posescore.pose import Landmark


class PointArithmeticTests(unittest.TestCase):
    def test_midpoint(self) -> None:
        mid = midpoint(Landmark(0, 0, 0), Landmark(2, -4, 6))
        self.assertEqual((mid.x, mid.y, mid.z), (1.0, -2.0, 3.0))

    def test_distance_3d_and_symmetric(self) -> None:
        a = Landmark(1, 2, 3)
        b = Landmark(4, 6, 3)
        self.assertAlmostEqual(distance(a, b), 5.0)
        self.assertAlmostEqual(distance(b, a), 5.0)
        self.assertAlmostEqual(distance(Landmark(0, 0, 0), Landmark(1, 2, 2)), 3.0)

    def test_distance_same_point_is_zero(self) -> None:
        point = Landmark(0.3, 0.7, -0.2)
        self.assertEqual(distance(point, point), 0.0)

    def test_translate_keeps_visibility(self) -> None:
        moved = translate([Landmark(1, 2, 3, visibility=0.8, presence=0.9)], Landmark(1, 1, 1))
        self.assertEqual(moved[0], Landmark(0, 1, 2, visibility=0.8, presence=0.9))

    def test_scale_divides_coordinates(self) -> None:
        scaled = scale([Landmark(2, 4, -6, visibility=0.5)], 2.0)
        self.assertEqual(scaled[0], Landmark(1, 2, -3, visibility=0.5))

    def test_scale_zero_factor_is_identity(self) -> None:
        original = [Landmark(2, 4, 6)]
        scaled = scale(original, 0)
        self.assertEqual(scaled, original)
        self.assertTrue(all(math.isfinite(v) for lm in scaled for v in (lm.x, lm.y, lm.z)))

    def test_rotate_quarter_turn(self) -> None:
        rotated = rotate_around_vertical_axis([Landmark(1, 5, 0)], math.pi / 2)
        self.assertAlmostEqual(rotated[0].x, 0.0)
        self.assertEqual(rotated[0].y, 5)
        self.assertAlmostEqual(rotated[0].z, 1.0)

    def test_rotate_zero_is_identity(self) -> None:
        rotated = rotate_around_vertical_axis([Landmark(0.2, 0.4, 0.6)], 0.0)
        self.assertAlmostEqual(rotated[0].x, 0.2)
        self.assertAlmostEqual(rotated[0].z, 0.6)


class JointAngleTests(unittest.TestCase):
    def test_perpendicular(self) -> None:
        self.assertAlmostEqual(joint_angle(Landmark(1, 0, 0), Landmark(0, 0, 0), Landmark(0, 1, 0)), 90.0)

    def test_opposite_rays(self) -> None:
        self.assertAlmostEqual(joint_angle(Landmark(1, 0, 0), Landmark(0, 0, 0), Landmark(-1, 0, 0)), 180.0)

    def test_same_direction(self) -> None:
        self.assertAlmostEqual(joint_angle(Landmark(1, 0, 0), Landmark(0, 0, 0), Landmark(2, 0, 0)), 0.0)

    def test_zero_length_ray(self) -> None:
        self.assertEqual(joint_angle(Landmark(1, 1, 1), Landmark(1, 1, 1), Landmark(0, 1, 0)), 0.0)

    def test_range(self) -> None:
        angle = joint_angle(Landmark(0.3, -0.2, 0.9), Landmark(0.1, 0.1, 0.1), Landmark(-0.7, 0.4, 0.2))
        self.assertGreaterEqual(angle, 0.0)
        self.assertLessEqual(angle, 180.0)


class VisibilityTests(unittest.TestCase):
    def test_missing_visibility_is_visible(self) -> None:
        self.assertTrue(is_landmark_visible(Landmark(0, 0, 0), 0.9))

    def test_threshold(self) -> None:
        self.assertTrue(is_landmark_visible(Landmark(0, 0, 0, visibility=0.6), 0.5))
        self.assertFalse(is_landmark_visible(Landmark(0, 0, 0, visibility=0.4), 0.5))

    def test_threshold_is_inclusive(self) -> None:
        self.assertTrue(is_landmark_visible(Landmark(0, 0, 0, visibility=0.5), 0.5))


if __name__ == "__main__":
    unittest.main()
