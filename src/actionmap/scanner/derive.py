"""Route derivation for a single action class.

For every method carrying the marker annotation, the path is::

    /{package segment}/{prefix}/{snake_case class name}/{method name}

The prefix comes from two rule tables on :class:`~actionmap.config.ScanConfig`:

- ``superclass_prefixes``: matched against the *immediate* superclass
  (``AppAction`` and ``SystemAction`` select ``json``, otherwise ``rest``)
- ``return_type_rules``: checked in order against the method's return
  type; the first rule that applies replaces the prefix (``jqGrid`` for a
  ``java.util.List`` returned from an ``AppAction``, ``excel`` for the
  Excel sentinel)

Each method yields at most one route: annotations are scanned only until
the first marker.  Methods come from ``all_methods()``, so a marker
method declared in a shared ancestor yields a route for every subclass.
"""

import logging
from dataclasses import dataclass

from actionmap.config import PathPrefix, ScanConfig, TypeMatch
from actionmap.index.protocol import AnnotationHandle, ClassHandle, MethodHandle, TypeHandle
from actionmap.routing.route import ActionRoute
from actionmap.scanner.naming import action_path_name, last_package_segment

logger = logging.getLogger("actionmap.scanner")


@dataclass(frozen=True, slots=True)
class ClassRouteBase:
    """Per-class path pieces shared by every route the class produces."""

    package_segment: str
    path_name: str
    superclass: str | None
    prefix: PathPrefix

    def path(self, method_name: str, prefix: PathPrefix | None = None) -> str:
        segment = (prefix or self.prefix).value
        return f"/{self.package_segment}/{segment}/{self.path_name}/{method_name}"


def class_route_base(cls: ClassHandle, config: ScanConfig) -> ClassRouteBase | None:
    """Compute the shared path pieces, or ``None`` when the class has no usable source."""
    source_file = cls.source_file
    if source_file is None or source_file.package_name is None:
        logger.debug("Skipping %r: not declared in a Java source file", cls)
        return None

    if cls.name is None:
        logger.debug("Skipping anonymous class in %s", source_file.path)
        return None

    superclass = cls.superclass
    superclass_name = superclass.qualified_name if superclass is not None else None
    return ClassRouteBase(
        package_segment=last_package_segment(source_file.package_name),
        path_name=action_path_name(cls.name, config.action_suffix),
        superclass=superclass_name,
        prefix=select_prefix(superclass_name, config),
    )


def select_prefix(superclass_name: str | None, config: ScanConfig) -> PathPrefix:
    """Prefix chosen by the immediate superclass, else the default."""
    for entry in config.superclass_prefixes:
        if entry.superclass == superclass_name:
            return entry.prefix
    return config.default_prefix


def return_type_prefix(
    return_type: TypeHandle | None,
    superclass_name: str | None,
    config: ScanConfig,
) -> PathPrefix | None:
    """Prefix override from the first applicable return-type rule, if any."""
    if return_type is None:
        return None

    for rule in config.return_type_rules:
        if rule.superclass is not None and rule.superclass != superclass_name:
            continue
        if rule.match is TypeMatch.QUALIFIED_NAME:
            resolved = return_type.resolve()
            matched = resolved is not None and resolved.qualified_name == rule.value
        else:
            matched = return_type.canonical_text == rule.value
        if matched:
            return rule.prefix
    return None


def find_marker(method: MethodHandle, config: ScanConfig) -> AnnotationHandle | None:
    """First annotation on ``method`` naming the marker, or ``None``."""
    for annotation in method.annotations:
        if annotation.qualified_name == config.marker_annotation:
            return annotation
    return None


def derive_routes(cls: ClassHandle, config: ScanConfig | None = None) -> list[ActionRoute]:
    """Derive one route per marker-annotated method of ``cls``.

    Returns an empty list when the class has no name, is not declared
    in a Java source file, or has no marker methods.
    """
    config = config or ScanConfig()
    base = class_route_base(cls, config)
    if base is None:
        return []

    routes: list[ActionRoute] = []
    for method in cls.all_methods():
        if find_marker(method, config) is None:
            continue
        override = return_type_prefix(method.return_type, base.superclass, config)
        routes.append(
            ActionRoute(
                method=config.http_method,
                path=base.path(method.name, override),
                source=method,
            )
        )
    return routes
