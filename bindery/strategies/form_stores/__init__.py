"""Concrete form store implementations."""

from bindery.strategies.form_stores.local import LocalFormStore

__all__ = [
    "LocalFormStore",
]
