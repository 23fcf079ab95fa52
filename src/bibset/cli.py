"""Command-line interface for bibset."""

import argparse
import logging
import sys
from pathlib import Path

from .config import MergeConfig, load_config
from .dedup import SetAction, deduplicate
from .exceptions import BibsetError
from .keys import fix_keys
from .model import File
from .parser import parse_file
from .report import print_report, save_report_json
from .sort import TYPE_YEAR_DESC, sort_records, split
from .writer import dump, write_file


def setup_logging(verbosity: int = 0) -> None:
    """Configure logging for the CLI application.

    Args:
        verbosity: Logging verbosity level (0=WARNING, 1=INFO, 2+=DEBUG)
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s:%(lineno)d – %(message)s",
    )


def _split_names(value: str | None) -> list[str]:
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]


def _emit(file: File, output: str | None) -> None:
    if output:
        write_file(file, Path(output))
    else:
        dump(file, sys.stdout)


def cmd_dedup(args: argparse.Namespace) -> None:
    """Report duplicates across files and optionally merge them."""
    logger = logging.getLogger(__name__)

    try:
        files = [parse_file(path) for path in args.files]
        result, report = deduplicate(files, _split_names(args.fields), SetAction(args.action))

        if args.report_json:
            save_report_json(report, Path(args.report_json))
        if result is None:
            print_report(report, sys.stdout)
        else:
            _emit(result, args.output)
            logger.info(f"✓ {report.result_set_count} records in {result.name}")

        logger.info(f"✓ {report.duplicate_set_count} duplicate sets found")
        sys.exit(0)

    except (BibsetError, OSError) as e:
        logger.error(f"Deduplication error: {e}")
        sys.exit(1)


def cmd_sort(args: argparse.Namespace) -> None:
    """Sort the records of a file."""
    logger = logging.getLogger(__name__)

    try:
        file = parse_file(args.file)
        sort_records(file, args.by)
        _emit(file, args.output)
        sys.exit(0)

    except (BibsetError, OSError) as e:
        logger.error(f"Sort error: {e}")
        sys.exit(1)


def cmd_fix_keys(args: argparse.Namespace) -> None:
    """Generate missing keys and disambiguate duplicate ones."""
    logger = logging.getLogger(__name__)

    try:
        file = parse_file(args.file)
        report = fix_keys(file, _split_names(args.fields), overwrite=args.all)
        if args.verbose:
            print_report(report, sys.stderr)
        _emit(file, args.output)
        sys.exit(0)

    except (BibsetError, OSError) as e:
        logger.error(f"Key repair error: {e}")
        sys.exit(1)


def cmd_split(args: argparse.Namespace) -> None:
    """Write one file per entry type."""
    logger = logging.getLogger(__name__)
    output_dir = Path(args.output)

    try:
        file = parse_file(args.file)
        parts = split(file)
        output_dir.mkdir(parents=True, exist_ok=True)
        for part in parts.values():
            write_file(part, output_dir / part.name)
        logger.info(f"✓ Wrote {len(parts)} files to {output_dir}")
        sys.exit(0)

    except (BibsetError, OSError) as e:
        logger.error(f"Split error: {e}")
        sys.exit(1)


def run_merge(files: list[File], config: MergeConfig) -> File:
    """Apply a configured merge, sort and key repair to parsed files."""
    logger = logging.getLogger(__name__)

    result, report = deduplicate(files, config.fields, config.set_action)
    if result is None:
        result, _ = deduplicate(files, action=SetAction.CONCAT)
        assert result is not None
    logger.info(f"{report.duplicate_set_count} duplicate sets across {len(files)} files")

    if config.sort:
        sort_records(result, config.sort)
    if config.fix_keys:
        fix_keys(result, config.key_fields, overwrite=config.overwrite_keys)
    return result


def cmd_merge(args: argparse.Namespace) -> None:
    """Run a merge described by a JSON configuration file."""
    logger = logging.getLogger(__name__)

    try:
        config = load_config(Path(args.config)) if args.config else MergeConfig()
        files = [parse_file(path) for path in args.files]
        result = run_merge(files, config)
        _emit(result, args.output)
        logger.info(f"✓ Merged {len(files)} files into {result.record_count()} records")
        sys.exit(0)

    except (BibsetError, OSError) as e:
        logger.error(f"Merge error: {e}")
        sys.exit(1)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="bibset",
        description="Merge, deduplicate, sort and re-key BibTeX exports.",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (use -v for INFO, -vv for DEBUG)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # dedup subcommand
    dedup_parser = subparsers.add_parser(
        "dedup", help="Find duplicate records and optionally merge files"
    )
    dedup_parser.add_argument("files", nargs="+", help="Input .bib files, in priority order")
    dedup_parser.add_argument(
        "--fields",
        type=str,
        default="",
        help="Comma-separated fields forming the fingerprint (default: citation key)",
    )
    dedup_parser.add_argument(
        "--action",
        default=SetAction.NONE.value,
        choices=[action.value for action in SetAction],
        help="Set operation: 'none' only reports duplicates (default)",
    )
    dedup_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    dedup_parser.add_argument(
        "--report-json", type=str, help="Also write the duplicate sets as JSON to this path"
    )
    dedup_parser.set_defaults(func=cmd_dedup)

    # sort subcommand
    sort_parser = subparsers.add_parser("sort", help="Sort records by type and year")
    sort_parser.add_argument("file", help="Input .bib file")
    sort_parser.add_argument(
        "--by",
        default=TYPE_YEAR_DESC,
        help=f"Sort specification (default and only supported: {TYPE_YEAR_DESC})",
    )
    sort_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    sort_parser.set_defaults(func=cmd_sort)

    # fix-keys subcommand
    keys_parser = subparsers.add_parser(
        "fix-keys", help="Generate missing citation keys and make all keys unique"
    )
    keys_parser.add_argument("file", help="Input .bib file")
    keys_parser.add_argument(
        "--fields",
        type=str,
        default="",
        help="Comma-separated fields to build keys from (default: author/year/title scheme)",
    )
    keys_parser.add_argument(
        "--all", action="store_true", help="Replace every key, not only missing ones"
    )
    keys_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    keys_parser.set_defaults(func=cmd_fix_keys)

    # split subcommand
    split_parser = subparsers.add_parser("split", help="Write one .bib file per entry type")
    split_parser.add_argument("file", help="Input .bib file")
    split_parser.add_argument("-o", "--output", required=True, help="Output directory")
    split_parser.set_defaults(func=cmd_split)

    # merge subcommand
    merge_parser = subparsers.add_parser(
        "merge", help="Merge files using options from a JSON configuration"
    )
    merge_parser.add_argument("files", nargs="+", help="Input .bib files, in priority order")
    merge_parser.add_argument("--config", type=str, help="Path to a JSON merge configuration")
    merge_parser.add_argument("-o", "--output", type=str, help="Output file (default: stdout)")
    merge_parser.set_defaults(func=cmd_merge)

    return parser


def main() -> None:
    """Main entry point for the bibset CLI."""
    parser = create_parser()
    args = parser.parse_args()

    # Setup logging based on verbosity
    setup_logging(args.verbose)

    # Handle case where no subcommand is provided
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    # Execute the subcommand
    args.func(args)


if __name__ == "__main__":
    main()
