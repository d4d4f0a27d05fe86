"""
Map client labels in a CSV file to Lune emission factors from the command line.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from ef_mapping.config import (
    ConfigurationError,
    get_external_http_settings,
    get_logging_settings,
    get_lookup_settings,
    get_lune_api_settings,
)
from ef_mapping.connectors.lune_connector import LuneConnector
from ef_mapping.logging_utils import configure_logging, log_event
from ef_mapping.services.aggregation_service import output_fields, write_csv
from ef_mapping.services.csv_loader_service import CSVLoaderService
from ef_mapping.services.mapping_pipeline import MappingPipeline
from ef_mapping.services.resolution_service import ResolutionService
from ef_mapping.validators.column_validator import ColumnConfig, ColumnConfigError, ColumnConfigValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FATAL = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ef-mapping",
        description=(
            "Map client names/regions from a CSV file to Lune emission factors "
            "and optionally estimate emissions."
        ),
    )
    parser.add_argument("csv_file", help="The CSV file to use as source.")
    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        default=None,
        help="The CSV file storing the results (default: standard output).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log per-row progress to standard error.",
    )
    parser.add_argument("--name-column", default="name", help="Column holding the label to map.")
    region = parser.add_mutually_exclusive_group()
    region.add_argument("--region-column", default="region", help="Column holding the region filter.")
    region.add_argument(
        "--no-region-column",
        action="store_true",
        help="Do not read a region column; lookups are not region filtered.",
    )
    parser.add_argument(
        "--activity-value-column",
        default=None,
        help="Column holding the activity amount (requires --activity-unit-column).",
    )
    parser.add_argument(
        "--activity-unit-column",
        default=None,
        help="Column holding the activity unit (requires --activity-value-column).",
    )
    return parser


def _column_config(args: argparse.Namespace) -> ColumnConfig:
    return ColumnConfig(
        name=args.name_column,
        region=None if args.no_region_column else args.region_column,
        activity_value=args.activity_value_column,
        activity_unit=args.activity_unit_column,
    )


def run(args: argparse.Namespace) -> int:
    columns = _column_config(args)
    try:
        ColumnConfigValidator().validate(columns)
        api_settings = get_lune_api_settings()
        lookup_settings = get_lookup_settings()
    except ColumnConfigError as exc:
        log_event(logger, logging.DEBUG, "column_config_invalid", **exc.to_dict())
        print(str(exc), file=sys.stderr)
        return EXIT_FATAL
    except ConfigurationError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_FATAL

    loaded = CSVLoaderService().load_with_headers(args.csv_file, columns)
    if loaded.is_err():
        print(loaded.error, file=sys.stderr)
        return EXIT_FATAL
    headers, rows = loaded.value

    connector = LuneConnector(settings=api_settings, http_settings=get_external_http_settings())
    try:
        pipeline = MappingPipeline(
            resolver=ResolutionService(catalog=connector, settings=lookup_settings),
            columns=columns,
            verbose=args.verbose,
        )
        summary = pipeline.run(rows)
    finally:
        connector.close()

    fields = output_fields(headers, include_emissions=columns.has_activity)
    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8", newline="") as handle:
                write_csv(summary.records, fields, handle)
        except OSError as exc:
            print(f"Failed to write {args.output}: {exc}", file=sys.stderr)
            return EXIT_FATAL
    else:
        write_csv(summary.records, fields, sys.stdout)

    print(
        f"Processed {summary.rows_processed} row(s): {summary.rows_resolved} resolved, "
        f"{summary.rows_not_found} without match, {summary.rows_failed} failed",
        file=sys.stderr,
    )
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_logging_settings().level, verbose=args.verbose)
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
