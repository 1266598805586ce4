from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from posescore.comparator import compare_videos
from posescore.config import DEFAULT_CONFIG, load_config
from posescore.pose import Video
from posescore.report import format_summary
from posescore.schema import validate_video_payload


def _load_video(path: Path) -> Video:
    if not path.is_file():
        raise FileNotFoundError(f"Video not found: {path}")
    payload = json.loads(path.read_text(encoding="utf-8"))
    ok, message = validate_video_payload(payload)
    if not ok:
        raise ValueError(f"{path.name} invalid: {message}")
    return Video.from_payload(payload)


def _run_compare(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else DEFAULT_CONFIG
    reference = _load_video(args.reference)
    comparison = _load_video(args.comparison)
    result = compare_videos(reference, comparison, config)
    logging.info(
        "Compared %s against %s: overall=%.2f frames=%d",
        args.comparison,
        args.reference,
        result.overall_score,
        len(result.frame_scores),
    )
    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        args.out.write_text(result.to_json(), encoding="utf-8")
        logging.info("Result written to %s", args.out)
    print(format_summary(result) if args.summary else result.to_json())
    return 0


def _run_validate(args: argparse.Namespace) -> int:
    if not args.video.is_file():
        raise FileNotFoundError(f"Video not found: {args.video}")
    payload = json.loads(args.video.read_text(encoding="utf-8"))
    ok, message = validate_video_payload(payload)
    print(message)
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pose sequence scoring tools")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    compare_parser = sub.add_parser("compare", help="Score a comparison video against a reference")
    compare_parser.add_argument("reference", type=Path, help="Path to reference video JSON")
    compare_parser.add_argument("comparison", type=Path, help="Path to comparison video JSON")
    compare_parser.add_argument("--config", type=Path, help="Optional comparator config JSON")
    compare_parser.add_argument("--out", type=Path, help="Write result JSON to this path")
    compare_parser.add_argument("--summary", action="store_true", help="Print a text summary instead of JSON")

    validate_parser = sub.add_parser("validate", help="Check a video JSON against the schema")
    validate_parser.add_argument("video", type=Path, help="Path to video JSON")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        if args.command == "compare":
            return _run_compare(args)
        return _run_validate(args)
    except OSError as exc:
        logging.error("%s", exc)
        return 2
    except (ValueError, json.JSONDecodeError) as exc:
        logging.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
