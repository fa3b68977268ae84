from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ._logging import setup_colored_logging
from ._version import __version__
from .catalog import MalformedCatalogError, load_catalog, resolve_catalog_path, user_catalog_path

logger = logging.getLogger(__name__)

_DESCRIPTION = """\
flux-lsp: Language Server Protocol implementation for Flux UI

Provides editor support for Flux components in Blade templates with:
• Autocompletion for <flux:*> component tags
• Prop completions with types, defaults and allowed values
• Livewire and Alpine.js attribute completions
• Hover documentation for components and props"""


def main():
    """Main entry point for the language server."""
    parser = argparse.ArgumentParser(
        description=_DESCRIPTION,
        prog="flux-lsp",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: %(default)s)",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        help=(
            "Path to a components.json catalog\n"
            "(default: $FLUX_LSP_CATALOG, the generated catalog, or the bundled one)"
        ),
    )
    parser.add_argument(
        "--no-pro",
        action="store_true",
        help="Do not suggest Flux Pro components",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Server subcommand
    server_parser = subparsers.add_parser(
        "server",
        help="Start the LSP server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--tcp", action="store_true", help="Use TCP instead of stdio")
    server_parser.add_argument(
        "--port", type=int, default=8080, help="TCP port to listen on (default: %(default)s)"
    )
    server_parser.add_argument("--stdio", action="store_true", help="Use stdio (default)")

    # Complete subcommand
    complete_parser = subparsers.add_parser(
        "complete",
        help="Print the completions for a position in a template file",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    complete_parser.add_argument("file", type=str, help="Template file to complete in")
    position_group = complete_parser.add_mutually_exclusive_group(required=True)
    position_group.add_argument("--offset", type=int, help="Cursor offset in characters")
    position_group.add_argument(
        "--line", type=int, help="Cursor line (0-indexed, use with --character)"
    )
    complete_parser.add_argument(
        "--character", type=int, default=0, help="Cursor column (0-indexed, default: %(default)s)"
    )

    # Catalog subcommand
    catalog_parser = subparsers.add_parser(
        "catalog",
        help="Manage the component catalog",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    catalog_group = catalog_parser.add_mutually_exclusive_group(required=True)
    catalog_group.add_argument(
        "--show",
        action="store_true",
        help="Print the path of the catalog in use",
    )
    catalog_group.add_argument(
        "--generate",
        type=str,
        metavar="FLUX_VIEWS_DIR",
        help=(
            "Generate the catalog from Flux sources\n"
            "(e.g. vendor/livewire/flux/resources/views/flux)"
        ),
    )
    catalog_parser.add_argument(
        "--output",
        type=str,
        help="Where to write the generated catalog (default: user data directory)",
    )

    args = parser.parse_args()

    # Require explicit subcommand
    if args.command is None:
        parser.error(
            "A subcommand is required. Use 'flux-lsp server' to start the LSP server.\n"
            "See 'flux-lsp --help' for available commands."
        )

    log_level = getattr(logging, args.log_level)
    setup_colored_logging(level=log_level)

    if args.command == "catalog":
        _run_catalog(args)
        return

    from .config import Settings

    settings = Settings(include_pro_components=not args.no_pro)

    try:
        catalog = load_catalog(args.catalog)
    except MalformedCatalogError as e:
        logger.error(f"Invalid catalog: {e}")
        sys.exit(1)

    if args.command == "complete":
        _run_complete(args, catalog, settings)
        return

    if args.command == "server":
        if args.tcp and args.stdio:
            parser.error("--tcp and --stdio are mutually exclusive")

        # Import server only when actually needed
        from .server import create_server

        server = create_server(catalog, settings)

        if args.tcp:
            logger.info(f"Starting Flux LSP server ({__version__}) on TCP port {args.port}")
            server.start_tcp("localhost", args.port)
        else:
            logger.info(f"Starting Flux LSP server ({__version__}) on stdio")
            server.start_io()


def _run_catalog(args: argparse.Namespace) -> None:
    """Show or regenerate the component catalog."""
    if args.show:
        path = resolve_catalog_path(args.catalog)
        print(path if path is not None else "<bundled>")
        return

    from .metadata.catalog_generator import generate_catalog, summarize

    source_dir = Path(args.generate)
    if not source_dir.is_dir():
        print(f"Error: Directory not found: {source_dir}", file=sys.stderr)
        sys.exit(1)

    output = Path(args.output) if args.output else user_catalog_path()
    merged = generate_catalog(source_dir, output)
    print(summarize(merged))


def _run_complete(args: argparse.Namespace, catalog, settings) -> None:
    """Print completions for a position in a file."""
    from lsprotocol.types import Position

    from ._server.utils import position_to_offset
    from .completion import CompletionEngine

    path = Path(args.file)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading {path}: {e}", file=sys.stderr)
        sys.exit(1)

    if args.offset is not None:
        offset = args.offset
    else:
        offset = position_to_offset(content, Position(line=args.line, character=args.character))

    engine = CompletionEngine(catalog, settings)
    for suggestion in engine.complete(content, offset):
        print(f"{suggestion.label}\t{suggestion.detail}")


if __name__ == "__main__":
    main()
