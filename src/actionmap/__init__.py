"""actionmap: a routing table for Sunbox action classes.

Scans a Java source tree for classes extending the Sunbox
``BaseAction``, and derives one route per method annotated with
``@ActionConstructInit`` from package, class, and method names.

Basic usage::

    from actionmap import JavaSourceIndex, scan_module

    index = JavaSourceIndex(["src/main/java"])
    for route in scan_module(index, index.module_scope()):
        print(route.display(), route.location)
"""

__version__ = "0.1.0"
__all__ = [
    "ActionMapError",
    "ActionRoute",
    "ConfigurationError",
    "HttpMethod",
    "JavaSourceIndex",
    "ModuleScope",
    "ScanConfig",
    "SourceRootError",
    "derive_routes",
    "find_action_classes",
    "scan_module",
    "scan_project",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import actionmap`` fast while providing a clean top-level API.
    """
    if name == "ScanConfig":
        from actionmap.config import ScanConfig

        return ScanConfig

    if name in ("ActionRoute", "HttpMethod"):
        from actionmap.routing import route as _route

        return getattr(_route, name)

    if name in ("JavaSourceIndex", "ModuleScope"):
        from actionmap import index as _index

        return getattr(_index, name)

    if name in ("derive_routes", "find_action_classes", "scan_module", "scan_project"):
        from actionmap import scanner as _scanner

        return getattr(_scanner, name)

    if name in ("ActionMapError", "ConfigurationError", "SourceRootError"):
        from actionmap import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
