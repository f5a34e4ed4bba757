"""Action class discovery.

Finds every class in a module scope that is a strict, transitive
subtype of the configured base action.  A base action the index cannot
resolve means the framework is not on the project's path; that yields
no classes rather than an error.
"""

import logging
from collections.abc import Mapping

from actionmap.config import ScanConfig
from actionmap.index.protocol import ClassHandle, FileKind, SearchScope, SemanticIndex
from actionmap.routing.route import ActionRoute
from actionmap.scanner.derive import derive_routes

logger = logging.getLogger("actionmap.scanner")


def find_action_classes(
    index: SemanticIndex,
    scope: SearchScope,
    config: ScanConfig | None = None,
) -> list[ClassHandle]:
    """Action classes in ``scope``, in file enumeration then declaration order."""
    config = config or ScanConfig()
    base = index.resolve_type(config.base_action)
    if base is None:
        logger.debug("Base action %s not found in index", config.base_action)
        return []

    classes: list[ClassHandle] = []
    for source_file in index.files_of_type(FileKind.JAVA, scope):
        for cls in source_file.classes:
            if cls.is_subtype_of(base, True):
                classes.append(cls)
    return classes


def scan_module(
    index: SemanticIndex,
    scope: SearchScope,
    config: ScanConfig | None = None,
) -> list[ActionRoute]:
    """Discover action classes in ``scope`` and derive their routes.

    Routes are ordered by file, then class, then ``all_methods()`` order.
    """
    config = config or ScanConfig()
    routes: list[ActionRoute] = []
    for cls in find_action_classes(index, scope, config):
        routes.extend(derive_routes(cls, config))
    logger.debug("Derived %d routes", len(routes))
    return routes


def scan_project(
    index: SemanticIndex,
    modules: Mapping[str, SearchScope],
    config: ScanConfig | None = None,
) -> dict[str, list[ActionRoute]]:
    """Run :func:`scan_module` for each named module, preserving module order."""
    config = config or ScanConfig()
    return {name: scan_module(index, scope, config) for name, scope in modules.items()}
