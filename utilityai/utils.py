"""Helpers for naming and identifying inputs, actions and markers."""

from __future__ import annotations

from typing import Any, Hashable


def _is_named(value: Any) -> bool:
    return hasattr(value, "__qualname__") and hasattr(value, "__module__")


def type_name_of(value: Any) -> str:
    """Fully qualified name of a function or class, or of an instance's type."""
    target = value if _is_named(value) else type(value)
    return f"{target.__module__}.{target.__qualname__}"


def trim_type_name(type_name: str) -> str:
    """Drop everything up to and including the last dot of a qualified name."""
    return type_name.rpartition(".")[2]


def type_id_of(value: Any) -> Hashable:
    """Identity key of a function or class, or of an instance's type."""
    return value if _is_named(value) else type(value)