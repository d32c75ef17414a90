"""
main – Command-line entry point.

    encounter-catalog --title sv --data-dir data/sv --output sv.json

Loads a title's data directory, builds its encounter catalog and writes
it out as JSON or CSV.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from encounter_catalog.adapters.title_data import load_title_data
from encounter_catalog.catalog_builder import CatalogBuilder
from encounter_catalog.config import DATA_DIR, DEFAULT_EXPORT_FORMAT, EXPORT_FORMATS
from encounter_catalog.errors import CatalogError
from encounter_catalog.export import EXPORTERS
from encounter_catalog.propagation import PropagationStrategy
from encounter_catalog.titles import TITLES, get_title

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def run(
    title_key: str,
    data_dir: Optional[Path] = None,
    output: Optional[Path] = None,
    fmt: str = DEFAULT_EXPORT_FORMAT,
    strategy: str = PropagationStrategy.MINIMAX.value,
) -> Path:
    """Load, build and export one title; returns the written path."""
    title = get_title(title_key)
    title_dir = Path(data_dir) if data_dir else DATA_DIR / title.key
    data = load_title_data(title, title_dir)

    builder = CatalogBuilder(
        title,
        data.directory,
        data.graph,
        data.sources,
        location_names=data.location_names,
        strategy=PropagationStrategy(strategy),
    )
    catalog = builder.build()
    return EXPORTERS[fmt](catalog, output)


def _configure_logging(verbose: bool, log_file: Optional[str]) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Encounter Catalog – build per-species encounter data",
    )
    parser.add_argument(
        "--title", "-t",
        type=str,
        required=True,
        choices=list(TITLES.keys()),
        help="Title to build",
    )
    parser.add_argument(
        "--data-dir", "-d",
        type=str,
        default=None,
        help="Title data directory (default: data/<title>)",
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output file (default: exports/encounters_<timestamp>.<format>)",
    )
    parser.add_argument(
        "--format", "-f",
        type=str,
        default=DEFAULT_EXPORT_FORMAT,
        choices=list(EXPORT_FORMATS),
        help=f"Output format (default: {DEFAULT_EXPORT_FORMAT})",
    )
    parser.add_argument(
        "--strategy",
        type=str,
        default=PropagationStrategy.MINIMAX.value,
        choices=[s.value for s in PropagationStrategy],
        help="Evolution level strategy (default: minimax)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the run's diagnostics to this file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose, args.log_file)

    try:
        path = run(
            args.title,
            data_dir=Path(args.data_dir) if args.data_dir else None,
            output=Path(args.output) if args.output else None,
            fmt=args.format,
            strategy=args.strategy,
        )
    except (CatalogError, OSError) as exc:
        logger.error("Catalog build failed: %s", exc)
        raise SystemExit(1) from exc

    print(f"Encounter catalog written to {path}")


if __name__ == "__main__":
    main()
