"""Canonical spelling of configuration names such as roles and event keys."""

from __future__ import annotations


def canonical_name(value: str | None) -> str:
    """Return ``value`` stripped and lower-cased; ``None`` becomes ``""``."""

    return (value or "").strip().lower()


__all__ = ["canonical_name"]
