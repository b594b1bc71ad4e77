"""
bootstrap/entrypoints.py - Command line entry point

Offline tooling around the layout engine: normalize a saved layout and
report its container height, or print the effective configuration.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import argparse
import json
import logging
import sys

from gridflow.layout import ItemDefaults, get_container_height, re_layout
from gridflow.errors import GridError
from .config import GridflowConfig, load_config

logger = logging.getLogger("bootstrap.entrypoints")


def setup_logging(level: str = "INFO", log_file: str = None, json_format: bool = False) -> None:
    """
    Configure application logging.

    Console output goes to stderr so command results on stdout stay
    machine readable.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:
        class JSONFormatter(logging.Formatter):
            def format(self, record):
                return json.dumps({
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                })

        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Console handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)


def _read_layout(path: str) -> List[Any]:
    """Layout file holds a list of items or {"layout": [...]}."""
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("layout", [])
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of layout items")
    return data


def _apply_overrides(config: GridflowConfig, args: argparse.Namespace) -> None:
    grid = config.grid
    if args.cols is not None:
        grid.cols = args.cols
    if args.compact is not None:
        grid.compact_type = args.compact
    if args.row_height is not None:
        grid.row_height = args.row_height
    if args.margin is not None:
        grid.margin = tuple(args.margin)
    if args.padding is not None:
        grid.container_padding = tuple(args.padding)
    grid.__post_init__()
    grid.validate()


def run_relayout(config: GridflowConfig, layout_path: str) -> Dict[str, Any]:
    """Normalize a layout file and measure it."""
    grid = config.grid
    raw = _read_layout(layout_path)
    layout = re_layout(
        raw,
        grid.compact_type,
        grid.cols,
        ItemDefaults(w=grid.default_item_w, h=grid.default_item_h),
    )
    height = get_container_height(layout, grid.position_params())

    logger.info(f"Normalized {len(layout)} of {len(raw)} items from {layout_path}")
    return {
        "layout": [item.to_dict() for item in layout],
        "height": height,
    }


def cli_main(args: Optional[List[str]] = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (uses sys.argv if None)

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="gridflow",
        description="Card grid layout engine tooling",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to JSON configuration file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Relayout command
    relayout_parser = subparsers.add_parser("relayout", help="Normalize and compact a layout file")
    relayout_parser.add_argument("layout_file", help="JSON file with the layout")
    relayout_parser.add_argument("--cols", type=int, help="Number of columns")
    relayout_parser.add_argument(
        "--compact",
        choices=["vertical", "horizontal", "none"],
        help="Compaction direction",
    )
    relayout_parser.add_argument("--row-height", type=float, help="Row height in pixels")
    relayout_parser.add_argument("--margin", type=float, nargs=2, metavar=("X", "Y"), help="Margin between items")
    relayout_parser.add_argument("--padding", type=float, nargs=2, metavar=("X", "Y"), help="Container padding")

    # Config command
    subparsers.add_parser("config", help="Print the effective configuration")

    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 1

    try:
        config = load_config(parsed.config)
    except (GridError, ValueError) as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    level = parsed.log_level or ("DEBUG" if parsed.verbose else config.logging.level)
    setup_logging(
        level=level,
        log_file=parsed.log_file or config.logging.log_file,
        json_format=parsed.json_logs or config.logging.json_logs,
    )

    try:
        if parsed.command == "relayout":
            _apply_overrides(config, parsed)
            result = run_relayout(config, parsed.layout_file)
            print(json.dumps(result, indent=2))
            return 0

        elif parsed.command == "config":
            print(json.dumps(config.to_dict(), indent=2))
            return 0

        return 1

    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except GridError as e:
        logger.error(f"{e.code}: {e.message}")
        return 1
    except Exception as e:
        logger.exception(f"Command failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(cli_main())
