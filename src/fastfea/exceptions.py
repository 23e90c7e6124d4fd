"""Errors raised by fastfea transformers and combinators."""

from __future__ import annotations


class FastFeaError(Exception):
    """Base class for all fastfea errors."""


class NotReadyError(FastFeaError, RuntimeError):
    """Raised when ``transform`` is called on a transformer that has not been finalized."""


class UnknownCategoryError(FastFeaError, KeyError):
    """Raised when an encoder is asked to transform a value it never observed."""


class CompositionError(FastFeaError, TypeError):
    """Raised when two transformers cannot be composed."""
