import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from flashlight.app.loop import run_stage


def main():
    parser = argparse.ArgumentParser(description="Flashlight Reveal Launcher")
    parser.add_argument("--stage", default="flashlight-reveal", help="Stage folder name under stages/")
    parser.add_argument("--screen", default="1280x720", help="Screen size WxH, e.g. 1280x720")
    parser.add_argument("--density", type=float, default=1.0, help="Device pixel density of the canvas")
    parser.add_argument("--fps", type=int, default=60, help="Display refresh cap")
    parser.add_argument("--debug", action="store_true", help="Show fps and reveal progress")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    w, h = map(int, args.screen.lower().split("x"))

    sys.exit(run_stage(
        stage_id=args.stage,
        screen_size=(w, h),
        pixel_density=args.density,
        fps=args.fps,
        debug=args.debug,
    ))


if __name__ == "__main__":
    main()
