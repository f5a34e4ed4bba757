"""Scan configuration.

ScanConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.  The Sunbox sentinel
names live here as rule tables so derivation stays table-driven.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from actionmap.errors import ConfigurationError
from actionmap.routing.route import HttpMethod

BASE_ACTION = "sunbox.core.action.BaseAction"
MARKER_ANNOTATION = "sunbox.core.action.ActionConstructInit"
APP_ACTION = "sunbox.core.action.app.AppAction"
SYSTEM_ACTION = "sunbox.core.action.system.SystemAction"
LIST_TYPE = "java.util.List"
EXCEL_RETURN = "sunbox.core.action.BaseAction#EXCEL"


class PathPrefix(Enum):
    """Second path segment of a derived route."""

    REST = "rest"
    JSON = "json"
    JQGRID = "jqGrid"
    EXCEL = "excel"


class TypeMatch(Enum):
    """Which view of a method's return type a rule compares against."""

    # Qualified name of the class the return type resolves to
    QUALIFIED_NAME = "qualified_name"
    # Canonical text of the return type as written, fully qualified
    CANONICAL_TEXT = "canonical_text"


@dataclass(frozen=True, slots=True)
class SuperclassPrefix:
    """Select ``prefix`` when a class's immediate superclass is ``superclass``."""

    superclass: str
    prefix: PathPrefix


@dataclass(frozen=True, slots=True)
class ReturnTypeRule:
    """Replace the prefix segment based on a method's return type.

    Attributes:
        match: How the return type is compared (see :class:`TypeMatch`).
        value: The qualified name or canonical text to compare with.
        prefix: Prefix segment used when the rule applies.
        superclass: When set, the rule applies only to classes whose
            immediate superclass has this qualified name.
    """

    match: TypeMatch
    value: str
    prefix: PathPrefix
    superclass: str | None = None


DEFAULT_SUPERCLASS_PREFIXES: tuple[SuperclassPrefix, ...] = (
    SuperclassPrefix(APP_ACTION, PathPrefix.JSON),
    SuperclassPrefix(SYSTEM_ACTION, PathPrefix.JSON),
)

DEFAULT_RETURN_TYPE_RULES: tuple[ReturnTypeRule, ...] = (
    ReturnTypeRule(TypeMatch.QUALIFIED_NAME, LIST_TYPE, PathPrefix.JQGRID, superclass=APP_ACTION),
    ReturnTypeRule(TypeMatch.CANONICAL_TEXT, EXCEL_RETURN, PathPrefix.EXCEL),
)


@dataclass(frozen=True, slots=True)
class ScanConfig:
    """Scanner configuration. Immutable after creation.

    All fields default to the Sunbox framework conventions. Override
    what you need::

        config = ScanConfig(base_action="com.acme.web.BaseAction")
    """

    # Discovery
    base_action: str = BASE_ACTION
    marker_annotation: str = MARKER_ANNOTATION

    # Derivation
    http_method: HttpMethod = HttpMethod.SUNBOX
    default_prefix: PathPrefix = PathPrefix.REST
    action_suffix: str = "_action"
    superclass_prefixes: tuple[SuperclassPrefix, ...] = DEFAULT_SUPERCLASS_PREFIXES
    return_type_rules: tuple[ReturnTypeRule, ...] = DEFAULT_RETURN_TYPE_RULES

    def __post_init__(self) -> None:
        if not self.base_action.strip():
            raise ConfigurationError("base_action must be a qualified class name")
        if not self.marker_annotation.strip():
            raise ConfigurationError("marker_annotation must be a qualified annotation name")

    def with_overrides(self, **changes: Any) -> "ScanConfig":
        """Return a copy with ``changes`` applied, skipping ``None`` values."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})
