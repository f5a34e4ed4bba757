"""Source-tree semantic index backed by javalang.

Parses every ``*.java`` file under the project's module roots and
library roots, then answers the queries the scanner needs: type
resolution, file enumeration, superclass and interface lookups, and
inherited-method listing.

Names are resolved the way javac does for a single compilation unit:

- type parameters (never resolve to a class)
- fully-qualified dotted names
- single-type imports
- types declared in the same package
- on-demand (``.*``) imports of indexed packages or library types
- implicit ``java.lang``

A type that is imported but has no source in the index becomes an
*external* class that knows only its qualified name.  Its superclass
comes from ``library_stubs``, which by default links the Sunbox
``AppAction`` and ``SystemAction`` bases to ``BaseAction`` so projects
that only import the framework still resolve their action hierarchy.
``library_types`` lists further external names, by default the
``@ActionConstructInit`` marker, that on-demand imports may resolve to.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import javalang

from actionmap.config import APP_ACTION, BASE_ACTION, MARKER_ANNOTATION, SYSTEM_ACTION
from actionmap.errors import SourceRootError
from actionmap.index.protocol import FileKind, SearchScope
from actionmap.index.scope import ModuleScope, ProjectScope

logger = logging.getLogger("actionmap.index")

OBJECT = "java.lang.Object"

DEFAULT_LIBRARY_STUBS: Mapping[str, str] = {
    APP_ACTION: BASE_ACTION,
    SYSTEM_ACTION: BASE_ACTION,
}

# Framework types that resolve through on-demand imports without source
DEFAULT_LIBRARY_TYPES: frozenset[str] = frozenset({MARKER_ANNOTATION})

# Implicitly imported java.lang types that commonly appear in signatures
_JAVA_LANG = frozenset({
    "AutoCloseable", "Boolean", "Byte", "CharSequence", "Character", "Class",
    "Cloneable", "Comparable", "Deprecated", "Double", "Enum", "Error",
    "Exception", "Float", "FunctionalInterface", "Integer", "Iterable", "Long",
    "Math", "Number", "Object", "Override", "Record", "Runnable",
    "RuntimeException", "Short", "String", "StringBuilder", "SuppressWarnings",
    "System", "Thread", "Throwable", "Void",
})

_PARSE_ERRORS = (javalang.parser.JavaSyntaxError, javalang.tokenizer.LexerError)


class JavaSourceIndex:
    """A :class:`~actionmap.index.protocol.SemanticIndex` over Java sources.

    Args:
        source_roots: Module source directories.  Enumerations with a
            :class:`ModuleScope` visit files under these.
        library_roots: Extra source directories that resolve project-wide
            but never belong to a module scope.
        library_stubs: External qualified name to superclass qualified
            name.  ``None`` uses :data:`DEFAULT_LIBRARY_STUBS`.
        library_types: Further external qualified names, such as
            annotations, that on-demand imports may resolve to.
            ``None`` uses :data:`DEFAULT_LIBRARY_TYPES`.

    Raises:
        SourceRootError: If any root is not a directory.
    """

    def __init__(
        self,
        source_roots: Iterable[str | Path],
        library_roots: Iterable[str | Path] = (),
        library_stubs: Mapping[str, str] | None = None,
        library_types: Iterable[str] | None = None,
    ) -> None:
        self.source_roots = _check_roots(source_roots)
        self.library_roots = _check_roots(library_roots)
        self.library_stubs = dict(DEFAULT_LIBRARY_STUBS if library_stubs is None else library_stubs)
        self.library_types = frozenset(DEFAULT_LIBRARY_TYPES if library_types is None else library_types)
        self._files: list[JavaFile] | None = None
        self._declared: dict[str, JavaClass] = {}
        self._imported: set[str] = set()
        self._external: dict[str, ExternalClass] = {}

    # -- SemanticIndex protocol --

    def resolve_type(self, qualified_name: str) -> JavaClass | ExternalClass | None:
        """Find a class by qualified name.

        Returns a declared class, or an external class that some file
        imports or that ``library_stubs`` or ``library_types`` mention,
        else ``None``.
        """
        self._ensure_loaded()
        declared = self._declared.get(qualified_name)
        if declared is not None:
            return declared
        if qualified_name in self._imported or self.is_library_type(qualified_name):
            return self._external_class(qualified_name)
        return None

    def files_of_type(self, kind: FileKind, scope: SearchScope) -> list[JavaFile]:
        """Indexed files of ``kind`` inside ``scope``, in sorted path order."""
        files = self._ensure_loaded()
        if kind is not FileKind.JAVA:
            return []
        return [f for f in files if scope.contains(f.path)]

    # -- Scopes --

    def module_scope(self, *roots: str | Path, name: str = "") -> ModuleScope:
        """A scope over ``roots``, or over every source root when omitted."""
        return ModuleScope.of(*(roots or self.source_roots), name=name)

    @property
    def project_scope(self) -> ProjectScope:
        return ProjectScope.of([*self.source_roots, *self.library_roots])

    # -- Resolution helpers used by handles --

    def class_for(self, qualified_name: str) -> JavaClass | ExternalClass:
        """Handle for a name some file resolved; external when not declared."""
        self._ensure_loaded()
        declared = self._declared.get(qualified_name)
        if declared is not None:
            return declared
        return self._external_class(qualified_name)

    def is_declared(self, qualified_name: str) -> bool:
        self._ensure_loaded()
        return qualified_name in self._declared

    def _external_class(self, qualified_name: str) -> ExternalClass:
        external = self._external.get(qualified_name)
        if external is None:
            external = ExternalClass(self, qualified_name)
            self._external[qualified_name] = external
        return external

    def is_library_type(self, qualified_name: str) -> bool:
        """Whether ``qualified_name`` is a stubbed or listed library type."""
        return (
            qualified_name in self.library_types
            or qualified_name in self.library_stubs
            or qualified_name in self.library_stubs.values()
        )

    # -- Loading --

    def _ensure_loaded(self) -> list[JavaFile]:
        if self._files is not None:
            return self._files

        files = [JavaFile.parse(self, path) for path in _java_paths([*self.source_roots, *self.library_roots])]
        self._files = files

        for java_file in files:
            self._imported.update(java_file.single_imports.values())
            for cls in java_file.classes:
                if cls.qualified_name is None:
                    continue
                if cls.qualified_name in self._declared:
                    logger.debug("Duplicate class %s in %s", cls.qualified_name, java_file.path)
                    continue
                self._declared[cls.qualified_name] = cls

        logger.info(
            "Indexed %d Java files, %d classes", len(files), len(self._declared)
        )
        return files


class JavaFile:
    """One parsed compilation unit."""

    __slots__ = ("index", "path", "package_name", "classes", "single_imports", "wildcard_imports")

    def __init__(self, index: JavaSourceIndex, path: Path) -> None:
        self.index = index
        self.path = path
        self.package_name = ""
        self.classes: list[JavaClass] = []
        self.single_imports: dict[str, str] = {}
        self.wildcard_imports: list[str] = []

    @classmethod
    def parse(cls, index: JavaSourceIndex, path: Path) -> JavaFile:
        """Parse ``path``.  Unreadable or malformed files have no classes."""
        java_file = cls(index, path)
        try:
            text = path.read_text(encoding="utf-8", errors="replace")
            tree = javalang.parse.parse(text)
        except OSError as exc:
            logger.warning("Cannot read %s: %s", path, exc)
            return java_file
        except _PARSE_ERRORS as exc:
            logger.warning("Cannot parse %s: %s", path, getattr(exc, "description", None) or exc)
            return java_file

        if tree.package is not None:
            java_file.package_name = tree.package.name

        for imp in tree.imports:
            if imp.static:
                continue
            if imp.wildcard:
                java_file.wildcard_imports.append(imp.path)
            else:
                java_file.single_imports[imp.path.rsplit(".", 1)[-1]] = imp.path

        for node in tree.types:
            if node is not None:
                java_file.classes.append(JavaClass(java_file, node))
        return java_file

    def qualify(self, simple_name: str) -> str:
        return f"{self.package_name}.{simple_name}" if self.package_name else simple_name

    def resolve_name(self, name: str, type_params: frozenset[str] = frozenset()) -> str | None:
        """Resolve a type name as written in this file to a qualified name."""
        if name in type_params:
            return None

        head, dot, rest = name.partition(".")
        if dot:
            if self.index.is_declared(name) or not head[:1].isupper():
                # Package-qualified, e.g. java.util.List
                return name
            # Nested reference, e.g. Map.Entry
            outer = self.resolve_name(head, type_params)
            return f"{outer}.{rest}" if outer else None

        if name in self.single_imports:
            return self.single_imports[name]

        local = self.qualify(name)
        if self.index.is_declared(local):
            return local

        for package in self.wildcard_imports:
            candidate = f"{package}.{name}"
            if self.index.is_declared(candidate) or self.index.is_library_type(candidate):
                return candidate

        if name in _JAVA_LANG:
            return f"java.lang.{name}"
        return None

    def __repr__(self) -> str:
        return f"JavaFile({str(self.path)!r})"


class JavaClass:
    """A top-level class, interface, enum, or annotation type with source."""

    __slots__ = ("file", "node", "name", "qualified_name", "_type_params", "_methods")

    def __init__(self, file: JavaFile, node: Any) -> None:
        self.file = file
        self.node = node
        self.name: str | None = node.name
        self.qualified_name: str | None = file.qualify(node.name) if node.name else None
        self._type_params = _type_param_names(node)
        self._methods: list[JavaMethod] | None = None

    @property
    def source_file(self) -> JavaFile:
        return self.file

    @property
    def is_interface(self) -> bool:
        return isinstance(self.node, (javalang.tree.InterfaceDeclaration, javalang.tree.AnnotationDeclaration))

    @property
    def superclass(self) -> JavaClass | ExternalClass | None:
        if self.qualified_name == OBJECT:
            return None
        extends = None if self.is_interface else getattr(self.node, "extends", None)
        if extends is not None:
            # None when the superclass name cannot be resolved
            return self._resolve_ref(extends)
        if isinstance(self.node, javalang.tree.EnumDeclaration):
            return self.file.index.class_for("java.lang.Enum")
        return self.file.index.class_for(OBJECT)

    def supertypes(self) -> list[JavaClass | ExternalClass]:
        """Superclass followed by directly implemented or extended interfaces."""
        supers: list[JavaClass | ExternalClass] = []
        if self.is_interface:
            refs = getattr(self.node, "extends", None) or []
        else:
            superclass = self.superclass
            if superclass is not None:
                supers.append(superclass)
            refs = getattr(self.node, "implements", None) or []
        for ref in refs:
            resolved = self._resolve_ref(ref)
            if resolved is not None:
                supers.append(resolved)
        return supers

    def methods(self) -> list[JavaMethod]:
        if self._methods is None:
            self._methods = [JavaMethod(self, m) for m in _method_nodes(self.node)]
        return self._methods

    def all_methods(self) -> list[JavaMethod]:
        methods: list[JavaMethod] = []
        for cls in _hierarchy(self):
            if isinstance(cls, JavaClass):
                methods.extend(cls.methods())
        return methods

    def is_subtype_of(self, base: Any, strict: bool = True) -> bool:
        return _is_subtype(self, base, strict)

    def _resolve_ref(self, ref: Any) -> JavaClass | ExternalClass | None:
        qualified = self.file.resolve_name(_reference_name(ref), self._type_params)
        if qualified is None:
            return None
        return self.file.index.class_for(qualified)

    def __repr__(self) -> str:
        return f"JavaClass({self.qualified_name!r})"


class ExternalClass:
    """A class known only by qualified name (no source in the index)."""

    __slots__ = ("index", "qualified_name", "name")

    def __init__(self, index: JavaSourceIndex, qualified_name: str) -> None:
        self.index = index
        self.qualified_name: str | None = qualified_name
        self.name: str | None = qualified_name.rsplit(".", 1)[-1]

    source_file = None

    @property
    def superclass(self) -> JavaClass | ExternalClass | None:
        parent = self.index.library_stubs.get(self.qualified_name or "")
        if parent is not None:
            return self.index.class_for(parent)
        return None

    def supertypes(self) -> list[JavaClass | ExternalClass]:
        superclass = self.superclass
        return [superclass] if superclass is not None else []

    def all_methods(self) -> list[JavaMethod]:
        return []

    def is_subtype_of(self, base: Any, strict: bool = True) -> bool:
        return _is_subtype(self, base, strict)

    def __repr__(self) -> str:
        return f"ExternalClass({self.qualified_name!r})"


class JavaMethod:
    """A method declaration on a :class:`JavaClass`."""

    __slots__ = ("owner", "node", "name", "_type_params")

    def __init__(self, owner: JavaClass, node: Any) -> None:
        self.owner = owner
        self.node = node
        self.name: str = node.name
        self._type_params = owner._type_params | _type_param_names(node)

    @property
    def annotations(self) -> list[JavaAnnotation]:
        return [JavaAnnotation(self.owner.file, a.name) for a in self.node.annotations]

    @property
    def return_type(self) -> JavaType:
        return JavaType(self.owner.file, self.node.return_type, self._type_params)

    def __repr__(self) -> str:
        return f"JavaMethod({self.owner.qualified_name!r}, {self.name!r})"


class JavaAnnotation:
    """An annotation usage, resolved against its file's imports."""

    __slots__ = ("file", "written_name")

    def __init__(self, file: JavaFile, written_name: str) -> None:
        self.file = file
        self.written_name = written_name

    @property
    def qualified_name(self) -> str | None:
        return self.file.resolve_name(self.written_name) or self.written_name


class JavaType:
    """A type reference as written in a method signature.

    ``node`` is a javalang ``BasicType``/``ReferenceType``, or ``None``
    for ``void``.
    """

    __slots__ = ("file", "node", "type_params")

    def __init__(self, file: JavaFile, node: Any, type_params: frozenset[str] = frozenset()) -> None:
        self.file = file
        self.node = node
        self.type_params = type_params

    @property
    def canonical_text(self) -> str:
        return _canonical(self.file, self.node, self.type_params)

    def resolve(self) -> JavaClass | ExternalClass | None:
        node = self.node
        if not isinstance(node, javalang.tree.ReferenceType) or node.dimensions:
            return None
        qualified = self.file.resolve_name(_reference_name(node), self.type_params)
        if qualified is None:
            return None
        return self.file.index.class_for(qualified)

    def __repr__(self) -> str:
        return f"JavaType({self.canonical_text!r})"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_roots(roots: Iterable[str | Path]) -> tuple[Path, ...]:
    checked: list[Path] = []
    for root in roots:
        path = Path(root).resolve()
        if not path.is_dir():
            raise SourceRootError(str(root))
        checked.append(path)
    return tuple(checked)


def _java_paths(roots: Sequence[Path]) -> list[Path]:
    paths: set[Path] = set()
    for root in roots:
        paths.update(p.resolve() for p in root.rglob(f"*{FileKind.JAVA.value}") if p.is_file())
    return sorted(paths)


def _type_param_names(node: Any) -> frozenset[str]:
    return frozenset(p.name for p in getattr(node, "type_parameters", None) or ())


def _method_nodes(node: Any) -> list[Any]:
    body = node.body or []
    # Enum bodies wrap their members in an EnumBody
    body = getattr(body, "declarations", body)
    return [decl for decl in body if isinstance(decl, javalang.tree.MethodDeclaration)]


def _reference_name(ref: Any) -> str:
    """``java.util.List`` from a ``ReferenceType`` chain linked by ``sub_type``."""
    parts: list[str] = []
    while ref is not None:
        parts.append(ref.name)
        ref = getattr(ref, "sub_type", None)
    return ".".join(parts)


def _last_arguments(ref: Any) -> list[Any]:
    arguments: list[Any] = []
    while ref is not None:
        arguments = getattr(ref, "arguments", None) or []
        ref = getattr(ref, "sub_type", None)
    return arguments


def _canonical(file: JavaFile, node: Any, type_params: frozenset[str]) -> str:
    if node is None:
        return "void"
    dims = "[]" * len(node.dimensions or ())
    if isinstance(node, javalang.tree.BasicType):
        return node.name + dims

    written = _reference_name(node)
    text = file.resolve_name(written, type_params) or written
    arguments = _last_arguments(node)
    if arguments:
        text += "<" + ",".join(_canonical_argument(file, a, type_params) for a in arguments) + ">"
    return text + dims


def _canonical_argument(file: JavaFile, argument: Any, type_params: frozenset[str]) -> str:
    if argument.type is None:
        return "?"
    inner = _canonical(file, argument.type, type_params)
    if argument.pattern_type in ("extends", "super"):
        return f"? {argument.pattern_type} {inner}"
    return inner


def _hierarchy(start: JavaClass | ExternalClass) -> Iterator[JavaClass | ExternalClass]:
    """``start`` and its supertypes, depth-first, each visited once."""
    seen: set[str] = set()
    stack = [start]
    while stack:
        cls = stack.pop()
        key = cls.qualified_name or repr(cls)
        if key in seen:
            continue
        seen.add(key)
        yield cls
        stack.extend(reversed(cls.supertypes()))


def _is_subtype(cls: JavaClass | ExternalClass, base: Any, strict: bool) -> bool:
    target = base.qualified_name
    if target is None:
        return False
    for ancestor in _hierarchy(cls):
        if ancestor is cls and strict:
            continue
        if ancestor.qualified_name == target:
            return True
    return False
