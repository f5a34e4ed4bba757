"""Semantic index protocols.

The scanner never parses Java itself.  It consumes an index that
resolves types, enumerates source files, and answers inheritance
queries.  Any object with the right shape works::

    class MyIndex:
        def resolve_type(self, qualified_name: str) -> ClassHandle | None: ...
        def files_of_type(self, kind: FileKind, scope: SearchScope) -> Sequence[SourceFile]: ...

No base class required.  :class:`~actionmap.index.javalang_index.JavaSourceIndex`
indexes a source tree; :mod:`actionmap.testing` provides in-memory doubles.
"""

from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import Protocol


class FileKind(Enum):
    """File types an index can enumerate."""

    JAVA = ".java"


class SearchScope(Protocol):
    """A boundary restricting which files an enumeration visits."""

    def contains(self, path: Path) -> bool: ...


class AnnotationHandle(Protocol):
    """An annotation applied to a method.

    ``qualified_name`` is the resolved name, or the name as written when
    it cannot be resolved.
    """

    @property
    def qualified_name(self) -> str | None: ...


class TypeHandle(Protocol):
    """A type reference, e.g. a method's declared return type."""

    @property
    def canonical_text(self) -> str: ...

    def resolve(self) -> "ClassHandle | None":
        """The class this type names, or ``None`` for non-class types."""
        ...


class MethodHandle(Protocol):
    """A method declared on, or inherited by, a class."""

    @property
    def name(self) -> str: ...

    @property
    def owner(self) -> "ClassHandle": ...

    @property
    def annotations(self) -> Sequence[AnnotationHandle]: ...

    @property
    def return_type(self) -> TypeHandle | None: ...


class ClassHandle(Protocol):
    """A class or interface known to the index."""

    @property
    def name(self) -> str | None: ...

    @property
    def qualified_name(self) -> str | None: ...

    @property
    def source_file(self) -> "SourceFile | None": ...

    @property
    def superclass(self) -> "ClassHandle | None": ...

    def all_methods(self) -> Sequence[MethodHandle]:
        """Own methods in declaration order, then inherited methods.

        Overridden ancestor methods are included, not de-duplicated.
        """
        ...

    def is_subtype_of(self, base: "ClassHandle", strict: bool = True) -> bool:
        """Transitive subtype check over superclasses and interfaces."""
        ...


class SourceFile(Protocol):
    """A file in the index.

    ``package_name`` is ``None`` when the file is not a Java source file,
    and ``""`` for the default package.
    """

    @property
    def path(self) -> Path: ...

    @property
    def package_name(self) -> str | None: ...

    @property
    def classes(self) -> Sequence[ClassHandle]:
        """Top-level classes in declaration order."""
        ...


class SemanticIndex(Protocol):
    """Project-wide symbol resolution and file enumeration."""

    def resolve_type(self, qualified_name: str) -> ClassHandle | None: ...

    def files_of_type(self, kind: FileKind, scope: SearchScope) -> Sequence[SourceFile]: ...
