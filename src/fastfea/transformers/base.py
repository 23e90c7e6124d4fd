"""
Base Transformer class.

A transformer is a small "micro-model": it may need to see the whole
dataset to learn its parameters, but it never predicts labels. It only
turns a raw sample into a feature value.

Lifecycle:
- ``observe`` is called once per sample while the transformer is learning
- ``finalize`` is called once after the last sample
- ``transform`` is then a pure function of the sample
"""

from __future__ import annotations

import typing
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from fastfea.config import TransformerConfig, merge_params
from fastfea.exceptions import CompositionError, NotReadyError


def types_compatible(produced: Any, expected: Any) -> bool:
    """
    Check whether a value of type ``produced`` can be fed where ``expected`` is declared.

    Generic aliases are reduced to their origin class, so ``List[str]`` is
    checked as ``list``. Anything that is still not a class (``None``,
    ``typing.Any``, unions, type variables, string forward references) is
    unknown and compatible with everything.
    """
    if produced is Any or expected is Any:
        return True
    produced = typing.get_origin(produced) or produced
    expected = typing.get_origin(expected) or expected
    if not (isinstance(produced, type) and isinstance(expected, type)):
        return True
    return issubclass(produced, expected)


class Transformer(ABC):
    """
    Base class for all transformers.

    Subclasses implement ``_transform`` and, when they learn from data,
    ``_observe`` and ``_finalize``. Stateless subclasses start ready; stateful
    ones pass ``ready=False`` to ``__init__``.

    Example:
        >>> class Length(Transformer):
        ...     def _transform(self, sample):
        ...         return len(sample)
        ...
        >>> Length().transform("abc")
        3
    """

    input_type: Any = None
    """Declared type of accepted samples, or None when unknown."""

    output_type: Any = None
    """Declared type of transformed values, or None when unknown."""

    def __init__(
        self,
        config: Optional[TransformerConfig] = None,
        *,
        ready: bool = True,
        **params: Any,
    ):
        """
        Initialize transformer.

        Args:
            config: Optional name and parameters.
            ready: Initial readiness. Stateful transformers start not ready.
            **params: Parameter overrides applied on top of ``config.params``.
        """
        self.config = config if config is not None else TransformerConfig()
        self.params = self.validate_params(merge_params(self.default_params(), self.config.params, params))
        self._ready = ready

    def default_params(self) -> Dict[str, Any]:
        return {}

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        unknown = sorted(set(params) - set(self.default_params()))
        if unknown:
            raise ValueError(f"{self.__class__.__name__} got unknown params: {unknown}")
        return params

    @property
    def name(self) -> str:
        """Get transformer name."""
        return self.config.name or self.__class__.__name__

    @property
    def ready(self) -> bool:
        """Whether learned parameters are frozen and ``transform`` is defined."""
        return self._ready

    def observe(self, sample: Any) -> None:
        """
        Incorporate one sample into the learned state.

        Does nothing once the transformer is ready.

        Args:
            sample: Raw input sample.
        """
        if self.ready:
            return
        self._observe(sample)

    def finalize(self) -> None:
        """
        Freeze learned parameters.

        Safe to call on a ready transformer, in which case it does nothing.
        """
        if self.ready:
            return
        self._finalize()
        self._ready = True

    def transform(self, sample: Any) -> Any:
        """
        Transform one sample.

        Args:
            sample: Raw input sample.

        Returns:
            The derived feature value.

        Raises:
            NotReadyError: If the transformer has not been finalized.
        """
        if not self.ready:
            raise NotReadyError(f"Transformer '{self.name}' must be finalized before transform")
        return self._transform(sample)

    def _observe(self, sample: Any) -> None:
        pass

    def _finalize(self) -> None:
        pass

    @abstractmethod
    def _transform(self, sample: Any) -> Any:
        """Compute the output for ``sample``. Only called once ready."""
        pass

    def then(self, other: "Transformer") -> "Transformer":
        """
        Chain ``other`` after this transformer.

        Args:
            other: Transformer consuming this transformer's output.

        Returns:
            A new Pipeline.
        """
        from fastfea.transformers.pipeline import Pipeline

        return Pipeline(self, other)

    def alongside(self, other: "Transformer", **params: Any) -> "Transformer":
        """
        Run ``other`` on the same input and merge both outputs.

        Args:
            other: Transformer consuming the same samples.
            **params: Combiner parameters, e.g. ``join_text``.

        Returns:
            A new Combiner.
        """
        from fastfea.transformers.combiner import Combiner

        return Combiner(self, other, **params)

    def __add__(self, other: Any) -> "Transformer":
        if not isinstance(other, Transformer):
            return NotImplemented
        return self.then(other)

    def __or__(self, other: Any) -> "Transformer":
        if not isinstance(other, Transformer):
            return NotImplemented
        return self.alongside(other)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}', ready={self.ready})"


def ensure_transformer(obj: Any, role: str) -> Transformer:
    """Raise CompositionError unless ``obj`` is a Transformer."""
    if not isinstance(obj, Transformer):
        raise CompositionError(f"Expected a Transformer for {role}, got {type(obj).__name__}")
    return obj
