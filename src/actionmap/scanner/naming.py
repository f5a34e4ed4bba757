"""Name transforms used to build action route paths."""


def last_package_segment(package: str) -> str:
    """Last dot-separated segment of a package name.

    ``"a.b.order"`` gives ``"order"``; the default package gives ``""``.
    """
    return package.rsplit(".", 1)[-1]


def to_snake_case(name: str) -> str:
    """Insert ``_`` before every non-leading uppercase letter, then lower-case.

    Only ASCII ``A``-``Z`` count as uppercase.  Each is treated
    independently, so acronyms split per letter: ``"HTTPAction"`` gives
    ``"h_t_t_p_action"``.
    """
    return "".join(
        f"_{char}" if index and "A" <= char <= "Z" else char for index, char in enumerate(name)
    ).lower()


def strip_action_suffix(name: str, suffix: str = "_action") -> str:
    """Drop a trailing ``suffix``; names without it are returned unchanged."""
    if suffix and name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def action_path_name(class_name: str, suffix: str = "_action") -> str:
    """``"UserAction"`` gives ``"user"``; ``"OrderQuery"`` gives ``"order_query"``."""
    return strip_action_suffix(to_snake_case(class_name), suffix)
