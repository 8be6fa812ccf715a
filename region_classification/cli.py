#!/usr/bin/env python3
"""
Command-line tool for region classification.

Features:
- Classify a single coordinate and optionally derive its node identifier
- Batch-classify a CSV of coordinates
- Render the region overlay to an image

Usage:
    region-classify point 40.7128 -74.0060
    region-classify point 51.04 -114.07 --key my-public-key
    region-classify csv points.csv --output classified.csv --boundaries countries.geojson
    region-classify overlay --output regions.png --rows 36 --cols 72
"""

import argparse
import logging
import sys
from pathlib import Path

from region_classification.boundaries import load_boundary_table
from region_classification.classifier import RegionClassifier, classify_dataframe
from region_classification.csv_source import load_points_csv
from region_classification.grid_overlay import RegionGrid
from region_classification.identifiers import InvalidKeyError, derive_node_id


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Classify coordinates into fixed region codes"
    )
    parser.add_argument(
        "--boundaries",
        type=Path,
        default=None,
        help="GeoJSON FeatureCollection of country boundaries (default: region boxes only)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    point = subparsers.add_parser("point", help="Classify a single coordinate")
    point.add_argument("latitude", type=float, help="Latitude in decimal degrees")
    point.add_argument("longitude", type=float, help="Longitude in decimal degrees")
    point.add_argument("--key", default=None, help="Key material; prints the derived node id")

    batch = subparsers.add_parser("csv", help="Classify every row of a CSV file")
    batch.add_argument("input", type=Path, help="Input CSV file")
    batch.add_argument(
        "--output",
        type=Path,
        default=Path("data/classified_points.csv"),
        help="Output CSV file path (default: data/classified_points.csv)",
    )
    batch.add_argument("--lat-col", default="latitude", help="Latitude column (default: latitude)")
    batch.add_argument("--lng-col", default="longitude", help="Longitude column (default: longitude)")
    batch.add_argument("--limit", type=int, default=None, help="Limit number of rows to process")

    overlay = subparsers.add_parser("overlay", help="Render the region overlay to an image")
    overlay.add_argument(
        "--output",
        type=Path,
        default=Path("data/region_overlay.png"),
        help="Output image path (default: data/region_overlay.png)",
    )
    overlay.add_argument("--rows", type=int, default=18, help="Grid rows (default: 18)")
    overlay.add_argument("--cols", type=int, default=36, help="Grid columns (default: 36)")
    overlay.add_argument(
        "--boxes",
        action="store_true",
        help="Draw raw region boxes instead of merged grid cells",
    )

    return parser


def run_point(args, classifier, logger):
    result = classifier.explain(args.latitude, args.longitude)
    logger.info("Coordinates: %.4f, %.4f", args.latitude, args.longitude)
    logger.info("Region code: %d", result["region_code"])
    logger.info("Region name: %s", result["region_name"])
    logger.info("Matched by: %s (%s)", result["match_method"], result["matched_id"])
    print(result["region_code"])

    if args.key is not None:
        node_id = derive_node_id(result["region_code"], args.key)
        print(node_id.hex())


def run_csv(args, classifier, logger):
    points_df = load_points_csv(
        args.input,
        lat_col=args.lat_col,
        lng_col=args.lng_col,
        limit=args.limit,
        logger=logger,
    )
    if points_df.empty:
        logger.error("No rows loaded from %s", args.input)
        sys.exit(1)

    classified = classify_dataframe(points_df, args.lat_col, args.lng_col, classifier)

    output_path = args.output.expanduser().resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    classified.to_csv(output_path, index=False)
    logger.info("Results saved to: %s", output_path)


def run_overlay(args, table, logger):
    from region_classification.plotting import save_region_overlay

    grid = RegionGrid(rows=args.rows, cols=args.cols)
    output_path = save_region_overlay(args.output, table, grid, use_grid=not args.boxes)
    logger.info("Overlay saved to: %s", output_path)


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        table = load_boundary_table(args.boundaries)
        classifier = RegionClassifier(table)
        logger.debug("Using %r", classifier)

        if args.command == "point":
            run_point(args, classifier, logger)
        elif args.command == "csv":
            run_csv(args, classifier, logger)
        elif args.command == "overlay":
            run_overlay(args, table, logger)

    except InvalidKeyError:
        logger.exception("Invalid key material")
        sys.exit(1)

    except (FileNotFoundError, KeyError, ValueError):
        logger.exception("Error during region classification run")
        sys.exit(1)


if __name__ == "__main__":
    main()
