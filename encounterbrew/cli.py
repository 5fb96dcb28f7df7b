"""
Encounterbrew CLI - Command-line interface for the text engine.

Usage:
    encounterbrew render <file>       Render a description file ("-" for stdin)
    encounterbrew localize <key>      Print the localized value of a key
    encounterbrew rules               List the directive rules in order

The localization document comes from --localization or
ENCOUNTERBREW_LOCALIZATION_PATH.
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from .config import get_settings
from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Encounterbrew - Directive text engine",
        prog="encounterbrew",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Render command
    render_parser = subparsers.add_parser("render", help="Render description text")
    render_parser.add_argument("file", nargs="?", default="-", help="Description file, '-' for stdin")
    render_parser.add_argument("--localization", "-l", help="Localization JSON document")
    render_parser.add_argument(
        "--no-localize-fallback",
        action="store_true",
        help="Leave unresolved @Localize[...] placeholders as written",
    )

    # Localize command
    localize_parser = subparsers.add_parser("localize", help="Resolve a localization key")
    localize_parser.add_argument("key", help="Dot-separated key, e.g. COMBAT.Begin")
    localize_parser.add_argument("--localization", "-l", help="Localization JSON document")

    # Rules command
    subparsers.add_parser("rules", help="List directive rules in order")

    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Error: {e}")
        sys.exit(1)
    setup_logging(settings.log_level, verbose=args.verbose)

    if args.command == "render":
        cmd_render(args, settings)
    elif args.command == "localize":
        cmd_localize(args, settings)
    elif args.command == "rules":
        cmd_rules(args)
    else:
        parser.print_help()
        sys.exit(1)


def _load_localizer(path, required=False):
    from .localization import LocalizationError, get_localizer

    if not path:
        if required:
            print("Error: no localization document (use --localization)")
            sys.exit(1)
        return None

    try:
        return get_localizer(path)
    except LocalizationError as e:
        print(f"Error: {e}")
        sys.exit(1)


def cmd_render(args, settings):
    """Render a description file."""
    from .pipeline import render_description
    from .text_engine import DirectiveRewriter

    if args.file == "-":
        text = sys.stdin.read()
    else:
        try:
            with open(args.file, "r", encoding="utf-8") as f:
                text = f.read()
        except OSError as e:
            print(f"Error: cannot read {args.file}: {e.strerror or e}")
            sys.exit(1)

    localizer = _load_localizer(args.localization or settings.localization_path)
    rewriter = DirectiveRewriter(localize_fallback=not args.no_localize_fallback)

    print(render_description(text, localizer=localizer, rewriter=rewriter))


def cmd_localize(args, settings):
    """Print the value of a localization key."""
    localizer = _load_localizer(args.localization or settings.localization_path, required=True)

    value = localizer.lookup(args.key)
    if value is None:
        print(f"Error: key not found: {args.key}")
        sys.exit(1)
    print(value)


def cmd_rules(args):
    """List the directive rules."""
    from .text_engine import DirectiveRewriter

    rewriter = DirectiveRewriter(localize_fallback=True)
    for position, rule in enumerate(rewriter.rules, start=1):
        print(f"{position:2d}. {rule.name:<24} {rule.pattern.pattern}")


if __name__ == "__main__":
    main()
