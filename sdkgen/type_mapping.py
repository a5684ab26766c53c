"""Java to Rust type spelling, backed by a packaged resource table."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Dict, Tuple


_RESOURCE_PACKAGE = "sdkgen._resources"
_RESOURCE_NAME = "java_type_map.txt"
_ARRAY_SUFFIX = "[]"


def _read_resource_text() -> str:
    try:
        resource = resources.files(_RESOURCE_PACKAGE).joinpath(_RESOURCE_NAME)
        with resource.open("r", encoding="utf-8") as handle:
            return handle.read()
    except (FileNotFoundError, ModuleNotFoundError):
        fallback = Path(__file__).resolve().parent / "_resources" / _RESOURCE_NAME
        with open(fallback, "r", encoding="utf-8") as handle:
            return handle.read()


@lru_cache(maxsize=1)
def _load_java_type_pairs() -> Tuple[Tuple[str, str], ...]:
    text = _read_resource_text()
    pairs: list[Tuple[str, str]] = []

    for idx, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            raise ValueError(
                f"Invalid entry in {_RESOURCE_NAME} on line {idx}: '{raw_line}'"
            )
        lhs, rhs = line.split("=", 1)
        lhs = lhs.strip()
        rhs = rhs.strip()
        if not lhs or not rhs:
            raise ValueError(
                f"Invalid entry in {_RESOURCE_NAME} on line {idx}: '{raw_line}'"
            )
        pairs.append((lhs, rhs))

    return tuple(pairs)


def get_java_type_map() -> Dict[str, str]:
    """Return a mapping of Java scalar spellings to Rust spellings."""

    return dict(_load_java_type_pairs())


def java_type_to_rust_type(java_type: str) -> str:
    """Map ``java_type`` to its Rust spelling.

    Scalars follow the resource table, so ``String`` maps to the borrowed
    ``&str``. Arrays become ``Vec<T>`` and their element keeps ownership,
    which makes ``String[]`` a ``Vec<String>``. Anything unknown is assumed to
    be a custom type (an enum, a params struct) and is returned unchanged.
    """

    java_type = java_type.strip()
    mapping = get_java_type_map()

    if java_type.endswith(_ARRAY_SUFFIX):
        base_type = java_type
        while base_type.endswith(_ARRAY_SUFFIX):
            base_type = base_type[: -len(_ARRAY_SUFFIX)]
        base_type = base_type.strip()
        if base_type == "String":
            element = "String"
        else:
            element = mapping.get(base_type, base_type)
        return f"Vec<{element}>"

    return mapping.get(java_type, java_type)
