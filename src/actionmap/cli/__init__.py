"""actionmap CLI: list the routes of Sunbox action classes.

Entry point registered as ``actionmap`` in ``pyproject.toml``::

    [project.scripts]
    actionmap = "actionmap.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``actionmap`` command."""
    parser = argparse.ArgumentParser(
        prog="actionmap",
        description="actionmap: derive routes from Sunbox action classes in Java sources.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log indexing progress (-vv for debug output)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- actionmap routes -------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List derived action routes")
    routes_parser.add_argument(
        "modules",
        nargs="+",
        metavar="MODULE_ROOT",
        help="Module source root (e.g. src/main/java); each is scanned separately",
    )
    routes_parser.add_argument(
        "--library",
        action="append",
        default=[],
        metavar="DIR",
        help="Source root resolved for types but never scanned (repeatable)",
    )
    routes_parser.add_argument(
        "--base-class",
        default=None,
        help="Qualified name of the base action class",
    )
    routes_parser.add_argument(
        "--marker",
        default=None,
        help="Qualified name of the endpoint marker annotation",
    )
    routes_parser.add_argument(
        "--format",
        choices=("table", "json"),
        default="table",
        help="Output format",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    _configure_logging(args.verbose)

    if args.command == "routes":
        from actionmap.cli._routes import run_routes

        run_routes(args)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)
