"""CLI for contextit: a thin consumer of the library."""

import argparse
import logging
import sys
from pathlib import Path

from contextit.log import configure_logging
from contextit.models import FileSignatures
from contextit.registry import LanguageRegistry
from contextit.reporting import format_json, format_markdown
from contextit.walker import load_ignore_spec, read_source_file, walk_source_files

logger = logging.getLogger(__name__)


def _collect_source_files(paths: list[str], registry: LanguageRegistry, use_ignore: bool) -> list[Path]:
    """Resolve paths to a flat, ordered list of files some language handles."""
    files: list[Path] = []
    for p in paths:
        path = Path(p)
        if path.is_file():
            if registry.for_path(path):
                files.append(path)
            else:
                logger.warning("skipping %s (unsupported file type)", p)
        elif path.is_dir():
            spec = load_ignore_spec(path) if use_ignore else None
            files.extend(walk_source_files(path, registry.suffixes, registry.ignore_dirs, spec))
        else:
            logger.warning("skipping %s (not a file or directory)", p)
    return files


def _extract_files(
    files: list[Path],
    registry: LanguageRegistry,
    include_code: bool,
    include_empty: bool = False,
) -> list[FileSignatures]:
    results: list[FileSignatures] = []
    for path in files:
        language = registry.for_path(path)
        try:
            source = read_source_file(path)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("cannot read %s: %s", path, e)
            continue

        signatures = language.extract(source)
        logger.info("%s: %d signatures", path, len(signatures))
        if not signatures and not include_empty:
            continue
        results.append(FileSignatures(
            path=path.as_posix(),
            language=language.markdown_language_id,
            signatures=signatures,
            code=source if include_code else None,
        ))
    return results


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="contextit",
        description="Extract function signatures from source code into a Markdown "
                    "(or JSON) document.\n\n"
                    "Supported: TypeScript/JavaScript, Go, Java, Python, Rust, PHP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=[],
        help="Files or directories to scan (default: current directory)",
    )
    parser.add_argument(
        "-i", "--input",
        action="append",
        dest="inputs",
        metavar="PATH",
        help="Source file or directory; may be repeated, same as a positional path",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the document to this file instead of stdout",
    )
    parser.add_argument(
        "-f", "--functions-only",
        action="store_true",
        help="Omit the full source section for each file",
    )
    parser.add_argument(
        "--include-empty",
        action="store_true",
        help="List files with no signatures as \"_No functions found_\" sections",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="output_json",
        help="Output signatures as JSON",
    )
    parser.add_argument(
        "--no-ignore",
        action="store_true",
        help="Do not apply .gitignore / .contextignore patterns",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every skipped file and dropped declaration to stderr",
    )
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    registry = LanguageRegistry()

    paths = (args.paths or []) + (args.inputs or [])
    files = _collect_source_files(paths or ["."], registry, not args.no_ignore)
    if not files:
        print("No supported source files found.", file=sys.stderr)
        sys.exit(1)

    results = _extract_files(
        files, registry, include_code=not args.functions_only, include_empty=args.include_empty,
    )
    document = format_json(results) if args.output_json else format_markdown(results)

    if args.output:
        try:
            Path(args.output).write_text(document, encoding="utf-8")
        except OSError as e:
            print(f"Error: cannot write {args.output}: {e}", file=sys.stderr)
            sys.exit(1)
        print(f"Documentation written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(document)
        if not document.endswith("\n"):
            sys.stdout.write("\n")


if __name__ == "__main__":
    main()
