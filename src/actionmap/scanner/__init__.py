"""Action scanner: discover Sunbox action classes and derive their routes.

Usage::

    from actionmap.index import JavaSourceIndex
    from actionmap.scanner import scan_module

    index = JavaSourceIndex(["src/main/java"])
    for route in scan_module(index, index.module_scope()):
        print(route.display())
"""

from actionmap.scanner.derive import derive_routes
from actionmap.scanner.discovery import find_action_classes, scan_module, scan_project
from actionmap.scanner.naming import action_path_name, last_package_segment, to_snake_case

__all__ = [
    "action_path_name",
    "derive_routes",
    "find_action_classes",
    "last_package_segment",
    "scan_module",
    "scan_project",
    "to_snake_case",
]
