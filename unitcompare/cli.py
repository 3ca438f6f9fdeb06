"""Command line interface for the unit price calculator."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from tabulate import tabulate

from .config import AppConfig, DisplayConfig, load_config
from .formatting import describe_result
from .pricing import Summary, SummaryStatus
from .reporting import export_summary
from .rows import RowStore

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/config.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find the product with the lowest price per unit")
    parser.add_argument(
        "--config",
        type=Path,
        help=f"Path to YAML configuration (defaults to {DEFAULT_CONFIG_PATH} when present)",
    )
    parser.add_argument(
        "--row",
        action="append",
        help="Product row in the format [Name=]quantity:price, e.g. 'Pack 6=6:4,50'",
    )
    parser.add_argument("--export", action="store_true", help="Write CSV and JSON reports")
    parser.add_argument("--output-dir", type=Path, help="Directory for generated reports (implies --export)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING)")
    parser.add_argument("--quiet", action="store_true", help="Suppress console table output")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = _load_app_config(args.config)
        _apply_overrides(config, args)
    except Exception as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    store = RowStore(messages=config.messages)
    store.load(config.rows)
    summary = store.calculate()

    if args.export or args.output_dir:
        try:
            export_summary(summary, config.output, config.display)
        except Exception as exc:
            logger.exception("Failed to export calculation results: %s", exc)
            return 1

    if not args.quiet:
        _print_summary(store, summary, config.display)

    return 0 if summary.status is SummaryStatus.SUCCESS else 1


def _load_app_config(path: Optional[Path]) -> AppConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    logger.debug("No configuration file found, using defaults")
    return AppConfig()


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    if args.row:
        config.rows = [parse_row_override(entry) for entry in args.row]

    if args.output_dir:
        config.output.directory = _resolve_override_path(args.output_dir)


def parse_row_override(value: str) -> Dict[str, str]:
    """Split ``[Name=]quantity:price`` into a row entry."""

    name, _, numbers = value.rpartition("=")
    if numbers.count(":") != 1:
        raise ValueError(f"Row '{value}' must be in the format [Name=]quantity:price")
    quantity, price = numbers.split(":")
    return {"name": name.strip(), "quantity": quantity.strip(), "price": price.strip()}


def _resolve_override_path(path: Path) -> Path:
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def _print_summary(store: RowStore, summary: Summary, display: DisplayConfig) -> None:
    table: List[List[str]] = []
    for row, computed in zip(store.rows, summary.rows):
        table.append(
            [
                "*" if row.id == summary.winner_id else "",
                computed.label,
                row.quantity or "-",
                row.price or "-",
                describe_result(computed, display),
            ]
        )

    print(tabulate(table, headers=["", "Product", "Quantity", "Price", "Result"], tablefmt="github"))
    print()
    print(summary.message)


if __name__ == "__main__":  # pragma: no cover - manual execution entry point
    raise SystemExit(main())
