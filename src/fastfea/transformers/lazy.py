"""
Lazy transformers.

A lazy transformer has nothing to fit. Like k-NN among classifiers, all of
its work happens at transform time, so it is ready from construction.
"""

from __future__ import annotations

import inspect
import typing
from typing import Any, Callable, Optional, Tuple

from fastfea.config import TransformerConfig
from fastfea.transformers.base import Transformer


def _annotated_types(func: Callable[..., Any]) -> Tuple[Any, Any]:
    """Read (input type, output type) from the first parameter and return annotations."""
    try:
        hints = typing.get_type_hints(func)
        params = list(inspect.signature(func).parameters)
    except (TypeError, ValueError, NameError):
        return None, None
    input_type = hints.get(params[0]) if params else None
    return input_type, hints.get("return")


class LazyTransformer(Transformer):
    """
    Transformer that wraps a pure function.

    Example:
        >>> first = LazyTransformer(lambda record: record["firstname"])
        >>> first.transform({"firstname": "Michael"})
        'Michael'
    """

    def __init__(self, func: Callable[[Any], Any], config: Optional[TransformerConfig] = None):
        """
        Initialize lazy transformer.

        Args:
            func: Function of one sample. Its annotations, when present,
                declare the transformer's input and output types.
            config: Optional name. Defaults to the function's name.
        """
        if not callable(func):
            raise TypeError(f"LazyTransformer expects a callable, got {type(func).__name__}")
        if config is None:
            name = getattr(func, "__name__", None)
            config = TransformerConfig(name=None if name == "<lambda>" else name)
        super().__init__(config, ready=True)
        self.func = func
        self.input_type, self.output_type = _annotated_types(func)

    def _transform(self, sample: Any) -> Any:
        return self.func(sample)


def lazy(func: Callable[[Any], Any]) -> LazyTransformer:
    """Decorator turning a function into a LazyTransformer."""
    return LazyTransformer(func)
