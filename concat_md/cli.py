"""Concatenate markdown files into a single document.

Usage:
    concat-md [options] <path> [<path> ...]

Examples:
    If files have titles in markdown already:
        concat-md --toc --decrease-title-levels --dir-name-as-title api-docs > README.md

    If files have titles in front matter:
        concat-md --toc --decrease-title-levels --title-key title --file-name-as-title --dir-name-as-title docs > README.md

    If files don't have titles:
        concat-md --toc --decrease-title-levels --file-name-as-title --dir-name-as-title docs > README.md
"""

import argparse
import sys
from pathlib import Path

from concat_md.concatenate import RunConfig, concat_documents
from concat_md.discovery import collect_sources, read_documents
from concat_md.errors import ConcatError


def split_strings(values_csv: str | None) -> list[str]:
    """Split a comma separated CLI value into a list of strings."""
    if not values_csv:
        return []
    return [value.strip() for value in values_csv.split(",") if value.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="concat-md",
        description="Concatenate markdown files and modify them as necessary",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("paths", type=Path, nargs="+", help="Directories or markdown files")
    parser.add_argument("--ignore", help="Comma separated glob patterns (or directory names) to exclude")
    parser.add_argument("--include", help="Comma separated glob patterns to look for (default: **/*.md)")
    parser.add_argument("--title", help="Title to add at the beginning of the output")
    parser.add_argument("--toc", action="store_true", help="Add a table of contents at the beginning")
    parser.add_argument(
        "--toc-level",
        type=int,
        default=3,
        help="Limit TOC entries to headings up to this level (default: 3)",
    )
    parser.add_argument(
        "--decrease-title-levels",
        action="store_true",
        help="Move headings of each file below the file and directory titles",
    )
    parser.add_argument(
        "--start-title-level-at",
        type=int,
        default=1,
        help="Level of the first file and directory titles (default: 1)",
    )
    parser.add_argument("--join-string", help="String used to join files (default: new line)")
    parser.add_argument("--title-key", help="Front matter key holding the file title")
    parser.add_argument("--file-name-as-title", action="store_true", help="Use file names as titles")
    parser.add_argument("--dir-name-as-title", action="store_true", help="Use directory names as titles")
    parser.add_argument("-o", "--output", type=Path, help="Write to this file instead of stdout")
    parser.add_argument(
        "-j", "--jobs",
        type=int,
        default=1,
        help="Number of files read in parallel (default: 1)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print a summary to stderr")
    parser.add_argument("--debug", action="store_true", help="Show the full traceback on errors")
    return parser


def config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        title=args.title,
        toc=args.toc,
        toc_level=args.toc_level,
        ignore=tuple(split_strings(args.ignore)),
        include=tuple(split_strings(args.include)),
        decrease_title_levels=args.decrease_title_levels,
        start_title_level_at=args.start_title_level_at,
        join_string=args.join_string,
        title_key=args.title_key,
        file_name_as_title=args.file_name_as_title,
        dir_name_as_title=args.dir_name_as_title,
    )


def run(args: argparse.Namespace) -> str:
    config = config_from_args(args)
    sources = collect_sources(args.paths, config.include, config.ignore)
    documents = read_documents(sources, jobs=args.jobs)
    result = concat_documents(documents, config)

    if args.verbose:
        print(f"Concatenated {len(documents)} files from {len(args.paths)} path(s)", file=sys.stderr)
    return result


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        result = run(args)
        if args.output:
            args.output.write_text(result, encoding="utf-8")
    except (ConcatError, OSError) as e:
        if args.debug:
            raise
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        if args.verbose:
            print(f"Output: {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(result)


if __name__ == "__main__":
    main()
