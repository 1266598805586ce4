import json
import unittest

from posescore.pose import Frame, Landmark, Video, frame_from_payload


class VideoPayloadTests(unittest.TestCase):
    def test_round_trip_json(self) -> None:
        video = Video(
            frames=(
                Frame(landmarks=(Landmark(0.1, 0.2, -0.3, visibility=0.9),), timestamp=33.0),
                Frame(landmarks=(Landmark(0.4, 0.5, 0.6),), timestamp=66.0),
            )
        )
        decoded = Video.from_json(video.to_json())
        self.assertEqual(decoded, video)

    def test_accepts_bare_frame_list(self) -> None:
        video = Video.from_payload([{"timestamp": 1, "landmarks": [{"x": 1, "y": 2}]}])
        self.assertEqual(len(video), 1)
        self.assertEqual(video.frames[0].landmarks[0], Landmark(1.0, 2.0, 0.0))
        self.assertIsNone(video.frames[0].landmarks[0].visibility)

    def test_rejects_invalid_landmark(self) -> None:
        with self.assertRaises(ValueError):
            Video.from_payload({"frames": [{"landmarks": [{"x": "a", "y": 1}]}]})
        with self.assertRaises(ValueError):
            Video.from_payload({"frames": "nope"})

    def test_rejects_out_of_range_numbers(self) -> None:
        huge = json.loads("1" + "0" * 400)
        with self.assertRaises(ValueError):
            Video.from_payload({"frames": [{"timestamp": 0, "landmarks": [{"x": huge, "y": 0}]}]})
        with self.assertRaises(ValueError):
            Landmark.from_payload({"x": float("nan"), "y": 0.0})
        with self.assertRaises(ValueError):
            Landmark.from_payload({"x": 0.0, "y": float("inf")})

    def test_lengths(self) -> None:
        frame = Frame(landmarks=(Landmark(0, 0, 0), Landmark(1, 1, 1)))
        self.assertEqual(len(frame), 2)
        self.assertEqual(len(Video(frames=(frame, frame, frame))), 3)
        self.assertEqual(len(Video()), 0)

    def test_frame_lists_become_tuples(self) -> None:
        frame = Frame(landmarks=[Landmark(0, 0, 0)], timestamp=0.0)
        self.assertIsInstance(frame.landmarks, tuple)


class FrameDecodingTests(unittest.TestCase):
    def test_accepts_array_payload(self) -> None:
        frame = frame_from_payload([{"x": 1, "y": 2}], now=123.0)
        self.assertEqual(frame, Frame(landmarks=(Landmark(1, 2),), timestamp=123.0, raw_type=None))

    def test_accepts_landmark_keys(self) -> None:
        for key in ("landmarks", "poseLandmarks", "points", "data"):
            frame = frame_from_payload({"timestamp": 1, key: [{"x": 1, "y": 2}]})
            self.assertIsNotNone(frame, key)
            self.assertEqual(frame.timestamp, 1.0)
            self.assertEqual(frame.landmarks, (Landmark(1, 2),))

    def test_accepts_typed_nested_payload(self) -> None:
        frame = frame_from_payload({"type": "pose-landmarks", "timestamp": 1, "data": [[{"x": 1, "y": 2}]]})
        self.assertEqual(frame, Frame(landmarks=(Landmark(1, 2),), timestamp=1.0, raw_type="pose-landmarks"))

    def test_nested_payload_prefers_last_pose(self) -> None:
        frame = frame_from_payload([[{"x": 1, "y": 1}], [{"x": 2, "y": 2}]], now=5.0)
        self.assertEqual(frame.landmarks, (Landmark(2, 2),))

    def test_filters_non_landmarks(self) -> None:
        frame = frame_from_payload({"landmarks": [{"x": 1, "y": 2, "visibility": 0.7}, {"x": 1}, "junk"]}, now=0.0)
        self.assertEqual(frame.landmarks, (Landmark(1, 2, visibility=0.7),))

    def test_skips_non_finite_landmarks(self) -> None:
        frame = frame_from_payload({"landmarks": [{"x": float("nan"), "y": 2}, {"x": 1, "y": 2}]}, now=0.0)
        self.assertEqual(frame.landmarks, (Landmark(1, 2),))
        self.assertIsNone(frame_from_payload([{"x": float("inf"), "y": 0}, {"x": 10**400, "y": 0}]))

    def test_defaults_timestamp_to_wall_clock(self) -> None:
        frame = frame_from_payload([{"x": 1, "y": 2}])
        self.assertGreater(frame.timestamp, 0.0)

    def test_rejects_payloads_without_landmarks(self) -> None:
        self.assertIsNone(frame_from_payload({"data": [[]]}))
        self.assertIsNone(frame_from_payload({"data": []}))
        self.assertIsNone(frame_from_payload([]))
        self.assertIsNone(frame_from_payload("hello"))


if __name__ == "__main__":
    unittest.main()
