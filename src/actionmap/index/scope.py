"""Search scopes: which files an enumeration may visit."""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ModuleScope:
    """Files under one module's source roots.

    Library roots indexed alongside the module are never inside this
    scope, even when they resolve as types project-wide.
    """

    roots: tuple[Path, ...]
    name: str = ""

    @classmethod
    def of(cls, *roots: str | Path, name: str = "") -> "ModuleScope":
        resolved = tuple(Path(r).resolve() for r in roots)
        return cls(roots=resolved, name=name or (resolved[0].name if resolved else ""))

    def contains(self, path: Path) -> bool:
        path = Path(path).resolve()
        return any(path.is_relative_to(root) for root in self.roots)


@dataclass(frozen=True, slots=True)
class ProjectScope:
    """Every file under any of the given roots."""

    roots: tuple[Path, ...]

    @classmethod
    def of(cls, roots: Iterable[str | Path]) -> "ProjectScope":
        return cls(roots=tuple(Path(r).resolve() for r in roots))

    def contains(self, path: Path) -> bool:
        path = Path(path).resolve()
        return any(path.is_relative_to(root) for root in self.roots)
