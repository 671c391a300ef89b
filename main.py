from __future__ import annotations
import argparse
from pathlib import Path

from config import Settings
from logconf import configure_logging


def parse_args(argv=None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Clinic patient and appointment records.")
    ap.add_argument("--data-dir", type=Path, default=Path("."),
                    help="directory holding patients.txt / appointments.txt (default: current directory)")
    ap.add_argument("--cli", action="store_true", help="use the text menu instead of the window")
    ap.add_argument("--log-level", default="WARNING")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(args.log_level)
    settings = Settings(data_dir=args.data_dir)
    if args.cli:
        from cli import run
    else:
        # Qt is only imported when the window is actually wanted
        from ui.main_window import run
    run(settings)


if __name__ == "__main__":
    main()
