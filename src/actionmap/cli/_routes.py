"""``actionmap routes``: list derived action routes.

Indexes the given module roots, scans each as its own module, and
prints METHOD, PATH, and HANDLER for every route.
"""

import argparse
import json
import sys

from actionmap.config import ScanConfig
from actionmap.errors import ActionMapError
from actionmap.index.javalang_index import DEFAULT_LIBRARY_TYPES, JavaSourceIndex
from actionmap.routing.route import ActionRoute
from actionmap.scanner.discovery import scan_project


def run_routes(args: argparse.Namespace) -> None:
    """Scan ``args.modules`` and print their routes.

    Exits with status 1 when a root is missing or the configuration is
    invalid.
    """
    try:
        config = ScanConfig().with_overrides(
            base_action=args.base_class,
            marker_annotation=args.marker,
        )
        index = JavaSourceIndex(
            args.modules,
            library_roots=args.library,
            library_types={*DEFAULT_LIBRARY_TYPES, config.marker_annotation},
        )
    except ActionMapError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    modules = {
        name: index.module_scope(root, name=name)
        for name, root in zip(args.modules, index.source_roots, strict=True)
    }
    results = scan_project(index, modules, config)

    # Build rows: (module, method, path, handler)
    rows: list[tuple[str, str, str, str]] = []
    for module, routes in results.items():
        rows.extend(_row(module, route) for route in routes)

    if args.format == "json":
        keys = ("module", "method", "path", "handler")
        print(json.dumps([dict(zip(keys, row, strict=True)) for row in rows], indent=2))
        return

    if not rows:
        print("No routes found.")
        return

    _print_table(rows, show_module=len(modules) > 1)


def _row(module: str, route: ActionRoute) -> tuple[str, str, str, str]:
    return (module, route.method.value, route.path, route.location)


def _print_table(rows: list[tuple[str, str, str, str]], *, show_module: bool) -> None:
    headers = ("MODULE", "METHOD", "PATH", "HANDLER")
    if not show_module:
        headers = headers[1:]
        rows = [row[1:] for row in rows]  # type: ignore[misc]

    # Column widths, last column unpadded
    widths = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers[:-1])]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths) + "  {}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 2 * len(widths) + max(len(r[-1]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
