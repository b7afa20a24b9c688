"""
schemadoc Command-Line Interface

This module provides the CLI entry point for schemadoc. It can print the
JSON-LD descriptor, print a ready-to-paste <script> element, or inject the
descriptor into every page of an already built documentation site.

Usage:
    schemadoc print
    schemadoc print --indent 2 --sort-keys
    schemadoc script
    schemadoc inject site/
    schemadoc inject site/ --include "guide/*" --dry-run --verbose

Design Principles:
    1. Sensible defaults: compact, HTML-safe JSON-LD
    2. Transparency: --verbose lists every page touched
    3. Safety: --dry-run reports what would change without writing
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from schemadoc import __version__
from schemadoc.discovery import discover_pages
from schemadoc.publisher import HtmlDocumentSink, MetadataPublisher
from schemadoc.renderer import PublishOptions, render_script_tag
from schemadoc.schema import build_descriptor


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="schemadoc",
        description=(
            "schemadoc: schema.org structured data for the FastMCP Runner docs.\n\n"
            "Renders a SoftwareApplication JSON-LD descriptor and publishes it "
            "into the <head> of documentation pages."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  schemadoc print                 # Compact JSON-LD to stdout\n"
            "  schemadoc print --indent 2      # Pretty-printed\n"
            "  schemadoc script                # <script> element to stdout\n"
            "  schemadoc inject site/          # Inject into a built site\n"
            "  schemadoc inject site/ --dry-run --verbose\n"
        ),
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Rendering options shared by every command
    render_options = argparse.ArgumentParser(add_help=False)
    render_options.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print with this many spaces (default: compact)",
    )
    render_options.add_argument(
        "--sort-keys",
        action="store_true",
        help="Emit keys in sorted order",
    )
    render_options.add_argument(
        "--no-escape-html",
        action="store_true",
        help="Do not escape <, > and & inside JSON strings",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    subparsers.add_parser(
        "print",
        parents=[render_options],
        help="Print the JSON-LD descriptor",
    )

    subparsers.add_parser(
        "script",
        parents=[render_options],
        help="Print the <script type=\"application/ld+json\"> element",
    )

    inject = subparsers.add_parser(
        "inject",
        parents=[render_options],
        help="Inject the descriptor into every page of a built site",
    )
    inject.add_argument(
        "site",
        type=str,
        help="Path to the built documentation site (e.g. site/)",
    )
    inject.add_argument(
        "--include",
        action="append",
        default=None,
        metavar="GLOB",
        help="Only inject into pages matching GLOB (repeatable)",
    )
    inject.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would change without writing files",
    )
    inject.add_argument(
        "--skip-existing",
        action="store_true",
        help="Skip pages that already contain a JSON-LD block",
    )

    return parser


def log(message: str, quiet: bool = False) -> None:
    """
    Print a message to stderr (for progress/status).

    Args:
        message: The message to print
        quiet: If True, suppress the message
    """
    if quiet:
        return
    print(f"[schemadoc] {message}", file=sys.stderr)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        print(f"  {message}", file=sys.stderr)


def options_from_args(args: argparse.Namespace) -> PublishOptions:
    """Build PublishOptions from parsed command-line arguments."""
    return PublishOptions(
        indent=args.indent,
        sort_keys=args.sort_keys,
        escape_html=not args.no_escape_html,
    )


def run_inject(
    site_path: Path,
    options: PublishOptions,
    include: Optional[list[str]] = None,
    dry_run: bool = False,
    skip_existing: bool = False,
    verbose: bool = False,
    quiet: bool = False,
) -> int:
    """
    Inject the descriptor into every page of a built site.

    Args:
        site_path: Root of the built site
        options: Rendering options
        include: Optional glob patterns restricting which pages are touched
        dry_run: If True, do not write any file
        skip_existing: If True, leave pages that already carry JSON-LD alone
        verbose: If True, show per-page progress
        quiet: If True, suppress non-error output

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    log("Discovering pages...", quiet=quiet)

    try:
        discovery = discover_pages(site_path, include=include)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for warning in discovery.warnings:
        log(f"Warning: {warning}", quiet=quiet)

    log_verbose(f"Found {discovery.page_count} pages", verbose, quiet)

    publisher = MetadataPublisher(options=options)
    updated = 0
    skipped = 0

    for page in discovery.pages:
        try:
            html = page.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading {page}: {e}", file=sys.stderr)
            return 1

        sink = HtmlDocumentSink(html)

        if skip_existing and sink.data_nodes(options.content_type):
            log_verbose(f"skip {page} (already has structured data)", verbose, quiet)
            skipped += 1
            continue

        if not publisher.publish_safely(sink):
            log(f"Warning: {page} has no <head>; skipped", quiet=quiet)
            skipped += 1
            continue

        if not dry_run:
            try:
                page.path.write_text(sink.render(), encoding="utf-8")
            except OSError as e:
                print(f"Error writing {page}: {e}", file=sys.stderr)
                return 1

        log_verbose(f"inject {page}", verbose, quiet)
        updated += 1

    if dry_run:
        log(f"(Dry run - {updated} pages would be updated, {skipped} skipped)", quiet=quiet)
    else:
        log(f"Updated {updated} pages ({skipped} skipped)", quiet=quiet)

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    options = options_from_args(args)

    if args.command == "print":
        print(MetadataPublisher(options=options).render_payload())
        return 0

    if args.command == "script":
        print(render_script_tag(build_descriptor(), options))
        return 0

    return run_inject(
        site_path=Path(args.site).resolve(),
        options=options,
        include=args.include,
        dry_run=args.dry_run,
        skip_existing=args.skip_existing,
        verbose=args.verbose,
        quiet=args.quiet,
    )


if __name__ == "__main__":
    sys.exit(main())
