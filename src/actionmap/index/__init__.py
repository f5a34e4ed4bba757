"""Semantic index: the type and file model the scanner reads.

The scanner depends only on the protocols in
:mod:`actionmap.index.protocol`.  :class:`JavaSourceIndex` is the
bundled implementation over a Java source tree.
"""

from actionmap.index.javalang_index import DEFAULT_LIBRARY_STUBS, JavaSourceIndex
from actionmap.index.protocol import (
    AnnotationHandle,
    ClassHandle,
    FileKind,
    MethodHandle,
    SearchScope,
    SemanticIndex,
    SourceFile,
    TypeHandle,
)
from actionmap.index.scope import ModuleScope, ProjectScope

__all__ = [
    "DEFAULT_LIBRARY_STUBS",
    "AnnotationHandle",
    "ClassHandle",
    "FileKind",
    "JavaSourceIndex",
    "MethodHandle",
    "ModuleScope",
    "ProjectScope",
    "SearchScope",
    "SemanticIndex",
    "SourceFile",
    "TypeHandle",
]
