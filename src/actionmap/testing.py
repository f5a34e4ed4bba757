"""In-memory semantic index for testing the scanner.

Implements exactly the surface in :mod:`actionmap.index.protocol`, with
no parsing.  Build a hierarchy by hand::

    index = FakeIndex()
    base = index.add_class("sunbox.core.action.BaseAction")
    order = index.add_class(
        "a.b.order.OrderAction",
        superclass=base,
        methods=[FakeMethod("list", annotations=[MARKER])],
    )
    routes = scan_module(index, FakeScope.everything())
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from actionmap.index.protocol import FileKind


@dataclass(slots=True)
class FakeAnnotation:
    qualified_name: str | None


@dataclass(slots=True)
class FakeType:
    """A return type.  ``target`` is what :meth:`resolve` returns."""

    canonical_text: str
    target: "FakeClass | None" = None

    def resolve(self) -> "FakeClass | None":
        return self.target


@dataclass(eq=False, slots=True)
class FakeMethod:
    name: str
    annotations: list[FakeAnnotation] = field(default_factory=list)
    return_type: FakeType | None = None
    owner: "FakeClass | None" = None

    def __repr__(self) -> str:
        owner = self.owner.qualified_name if self.owner else None
        return f"FakeMethod({owner!r}, {self.name!r})"


@dataclass(eq=False, slots=True)
class FakeClass:
    """A class.  ``interfaces`` take part in subtype checks only."""

    name: str | None
    qualified_name: str | None
    source_file: "FakeFile | None" = None
    superclass: "FakeClass | None" = None
    interfaces: list["FakeClass"] = field(default_factory=list)
    methods: list[FakeMethod] = field(default_factory=list)

    def add_method(self, method: FakeMethod) -> FakeMethod:
        method.owner = self
        self.methods.append(method)
        return method

    def all_methods(self) -> list[FakeMethod]:
        collected: list[FakeMethod] = []
        cls: FakeClass | None = self
        seen: set[int] = set()
        while cls is not None and id(cls) not in seen:
            seen.add(id(cls))
            collected.extend(cls.methods)
            cls = cls.superclass
        return collected

    def is_subtype_of(self, base: "FakeClass", strict: bool = True) -> bool:
        if not strict and self is base:
            return True
        pending = [self.superclass, *self.interfaces]
        seen: set[int] = set()
        while pending:
            cls = pending.pop()
            if cls is None or id(cls) in seen:
                continue
            if cls is base:
                return True
            seen.add(id(cls))
            pending.extend([cls.superclass, *cls.interfaces])
        return False

    def __repr__(self) -> str:
        return f"FakeClass({self.qualified_name!r})"


@dataclass(eq=False, slots=True)
class FakeFile:
    path: Path
    package_name: str | None
    classes: list[FakeClass] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class FakeScope:
    """Contains paths under ``prefix``; an empty prefix contains everything."""

    prefix: str = ""

    @classmethod
    def everything(cls) -> "FakeScope":
        return cls()

    def contains(self, path: Path) -> bool:
        return str(path).startswith(self.prefix)


class FakeIndex:
    """Dictionary-backed index.  Files enumerate in insertion order."""

    def __init__(self) -> None:
        self.files: list[FakeFile] = []
        self.types: dict[str, FakeClass] = {}
        self.enumerations = 0

    def resolve_type(self, qualified_name: str) -> FakeClass | None:
        return self.types.get(qualified_name)

    def files_of_type(self, kind: FileKind, scope: FakeScope) -> list[FakeFile]:
        self.enumerations += 1
        if kind is not FileKind.JAVA:
            return []
        return [f for f in self.files if scope.contains(f.path)]

    def add_external(self, qualified_name: str, superclass: FakeClass | None = None) -> FakeClass:
        """Register a resolvable class with no source file (a library type)."""
        cls = FakeClass(
            name=qualified_name.rsplit(".", 1)[-1],
            qualified_name=qualified_name,
            superclass=superclass,
        )
        self.types[qualified_name] = cls
        return cls

    def add_class(
        self,
        qualified_name: str,
        *,
        superclass: FakeClass | None = None,
        interfaces: Iterable[FakeClass] = (),
        methods: Iterable[FakeMethod] = (),
        path: str | None = None,
    ) -> FakeClass:
        """Declare a class in its own source file and register it."""
        package, _, simple = qualified_name.rpartition(".")
        source = FakeFile(
            path=Path(path or f"/src/{qualified_name.replace('.', '/')}.java"),
            package_name=package,
        )
        cls = FakeClass(
            name=simple,
            qualified_name=qualified_name,
            source_file=source,
            superclass=superclass,
            interfaces=list(interfaces),
        )
        for method in methods:
            cls.add_method(method)
        source.classes.append(cls)
        self.files.append(source)
        self.types[qualified_name] = cls
        return cls
