"""
Command-line interface for cvflow.

Usage:
    cvflow paginate resume.json --output resume.pages.json
    cvflow paginate resume.json --page-size letter --capacity 700 --ledger
    cvflow info resume.json
    cvflow version
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .engine.geometry import PAGE_SIZES


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="cvflow",
        description="cvflow - split résumé documents into fixed-size pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  cvflow paginate resume.json -o resume.pages.json
  cvflow paginate resume.json --capacity 760 --ledger
  cvflow info resume.json --json
  cvflow version
        """,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    paginate_parser = subparsers.add_parser("paginate", help="Paginate a JSON résumé document")
    paginate_parser.add_argument("input", help="Input JSON document")
    paginate_parser.add_argument(
        "-o", "--output",
        help="Output JSON file path (default: <input>.pages.json)"
    )
    paginate_parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        default="a4",
        help="Page size (default: a4)"
    )
    paginate_parser.add_argument(
        "--capacity",
        type=float,
        help="Usable page height in points (default: derived from page size and margins)"
    )
    paginate_parser.add_argument(
        "--ledger",
        action="store_true",
        help="Include per-unit offsets and heights in the output"
    )
    paginate_parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Do not print the page summary table"
    )

    info_parser = subparsers.add_parser("info", help="Show document information")
    info_parser.add_argument("input", help="Input JSON document")
    info_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON"
    )

    subparsers.add_parser("version", help="Show version information")

    return parser


def cmd_paginate(args) -> int:
    """Handle paginate command."""
    from .engine.page_engine import PageConfig
    from .engine.page_orchestrator import PageOrchestrator
    from .export.pages_json_exporter import export_pages
    from .importers.document_json_importer import load_document
    from .utils.rich_logger import RichLogger

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    output_path = Path(args.output) if args.output else input_path.with_suffix(".pages.json")

    design_font, sections = load_document(input_path)
    page_config = PageConfig.from_name(args.page_size, design_font)
    orchestrator = PageOrchestrator(page_config, design_font=design_font, capacity=args.capacity)
    pages = orchestrator.paginate_all(sections)

    if not export_pages(pages, output_path, include_ledger=args.ledger):
        print(f"Error: Could not write {output_path}", file=sys.stderr)
        return 1

    if not args.quiet:
        console_logger = RichLogger("cvflow.cli", args.log_level)
        console_logger.pages_table(pages)
        console_logger.success(f"Saved {len(pages)} pages: {output_path}")
    return 0


def cmd_info(args) -> int:
    """Handle info command."""
    from .engine.page_engine import PageConfig
    from .importers.document_json_importer import load_document
    from .models.section import count_rows

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    design_font, sections = load_document(input_path)
    page_config = PageConfig.a4(design_font)
    info = {
        "file": str(input_path),
        "sections": [
            {
                "index": index,
                "type": section.section_type.value,
                "title": section.section_title,
                "rows": len(section.rows),
                "column": section.column,
            }
            for index, section in enumerate(sections)
        ],
        "total_rows": count_rows(sections),
        "design_font": design_font.to_dict(),
        "a4_capacity": round(page_config.content_height, 2),
    }

    if args.json:
        print(json.dumps(info, indent=2, ensure_ascii=False))
    else:
        print(f"📄 File: {input_path}")
        print(f"   Sections: {len(sections)}, rows: {info['total_rows']}")
        print(f"   A4 capacity: {info['a4_capacity']}pt")
        print()
        for entry in info["sections"]:
            print(f"   [{entry['index']}] {entry['type']:<16} {entry['rows']:>3} rows  {entry['title']}")
    return 0


def cmd_version(args=None) -> int:
    """Handle version command."""
    from .version import __version__
    print(f"cvflow v{__version__}")
    print("Résumé pagination engine")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    from .exceptions import CvflowError, handle_exception
    from .utils.rich_logger import RichLogger, setup_logging

    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    commands = {
        "paginate": cmd_paginate,
        "info": cmd_info,
        "version": cmd_version,
    }
    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        return handler(args)
    except CvflowError as exc:
        error_info = handle_exception(exc, context={"command": args.command, "input": getattr(args, "input", None)})
        console_logger = RichLogger("cvflow.cli", args.log_level)
        console_logger.failure(f"{exc} ({error_info['error_code']})")
        console_logger.debug(f"Error details: {error_info}")
        return 2


if __name__ == "__main__":
    sys.exit(main() or 0)
