"""Command-line interface for screenmark.

Parses flags, builds the runtime configuration and runs the overlay. Exit
codes: 0 on a normal quit, 1 when startup fails or presentation breaks
down during the loop, 2 for invalid options (argparse convention).
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from screenmark import __version__
from screenmark.app import overlay
from screenmark.config import RuntimeConfig, make_runtime_config
from screenmark.settings.store import SettingsStore

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    Options left unset keep their persisted/default values.
    """
    p = argparse.ArgumentParser(
        prog="screenmark",
        description="Capture the screen and annotate it with a zoomable overlay",
    )
    p.add_argument(
        "--image",
        type=str,
        default=None,
        help="Annotate this image file instead of capturing the screen",
    )
    p.add_argument(
        "--brush-size",
        dest="brush_size",
        type=float,
        default=None,
        help="Brush size in screen pixels (default: 5)",
    )
    p.add_argument(
        "--focus-radius",
        dest="focus_radius",
        type=float,
        default=None,
        help="Spotlight radius in screen pixels (default: 125)",
    )
    p.add_argument(
        "--fps",
        type=float,
        default=None,
        help="Target frame rate (default: 60)",
    )
    p.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Render threads per frame (default: 1)",
    )
    p.add_argument(
        "--windowed",
        action="store_true",
        help="Open a resizable window instead of a borderless fullscreen one",
    )
    p.add_argument(
        "--headless",
        action="store_true",
        help="Render offscreen without a window (for CI and exports)",
    )
    p.add_argument(
        "--frames",
        type=int,
        default=None,
        help="Stop after this many frames",
    )
    p.add_argument(
        "--save-png",
        dest="save_png",
        type=str,
        default=None,
        help="Write the last rendered frame to this PNG on exit",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING)",
    )
    p.add_argument(
        "--save-settings",
        dest="save_settings",
        action="store_true",
        help="Persist the effective brush/spotlight/render options as new defaults",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


async def run_async(cfg: RuntimeConfig) -> int:
    """Async entrypoint for programmatic usage/testing."""
    try:
        return await overlay.main_async(cfg)
    except overlay.StartupError as e:
        logger.error("startup failed: %s", e)
        return 1


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint; returns the process exit code."""
    args = parse_args(argv)
    if args.version:
        print(f"screenmark {__version__}")
        return 0

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = make_runtime_config(args=args)
    except ValueError as e:
        logger.error("%s", e)
        return 2
    if args.save_settings:
        SettingsStore.save(cfg.settings)

    try:
        return asyncio.run(run_async(cfg))
    except KeyboardInterrupt:
        # Allow graceful cancellation via Ctrl+C
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
