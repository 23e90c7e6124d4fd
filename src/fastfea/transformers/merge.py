"""
Generic merge of two transformer outputs.

Combiner outputs are flat: merging never nests a composite inside another
composite. Values are classified into a small set of shapes and the merge
rule is looked up by the pair of shapes:

- scalar + scalar        -> (a, b)
- composite + scalar     -> a + (b,)     (and the mirror case)
- composite + composite  -> a + b
- list + list            -> a + b
- ndarray + ndarray      -> numpy.concatenate
- text + text            -> a + b when ``join_text`` is set, else (a, b)

Any other pair is merged as two scalars.

Sequences that meet at the edge of a composite are concatenated too, so
``(x | y) | z`` and ``x | (y | z)`` always give the same result.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Tuple

import numpy as np


class Shape(str, Enum):
    SCALAR = "scalar"
    COMPOSITE = "composite"
    LIST = "list"
    ARRAY = "array"
    TEXT = "text"


MergeFn = Callable[[Any, Any, bool], Any]

MERGE_REGISTRY: Dict[Tuple[Shape, Shape], MergeFn] = {}


def register_merge(left: Shape, right: Shape) -> Callable[[MergeFn], MergeFn]:
    """Decorator to register the merge rule for a pair of shapes."""

    def decorator(fn: MergeFn) -> MergeFn:
        MERGE_REGISTRY[(left, right)] = fn
        return fn

    return decorator


def shape_of(value: Any) -> Shape:
    """Classify a value for merging."""
    if isinstance(value, tuple):
        return Shape.COMPOSITE
    if isinstance(value, str):
        return Shape.TEXT
    if isinstance(value, list):
        return Shape.LIST
    if isinstance(value, np.ndarray) and value.ndim == 1:
        return Shape.ARRAY
    return Shape.SCALAR


def _concatenates(first: Any, second: Any, join_text: bool) -> bool:
    """Whether two fragments are joined into one sequence rather than kept apart."""
    left, right = shape_of(first), shape_of(second)
    if left != right:
        return False
    return left in (Shape.LIST, Shape.ARRAY) or (left == Shape.TEXT and join_text)


def _concat(first: Any, second: Any) -> Any:
    if isinstance(first, np.ndarray):
        return np.concatenate([first, second])
    return first + second


@register_merge(Shape.COMPOSITE, Shape.COMPOSITE)
def _merge_composites(first: tuple, second: tuple, join_text: bool) -> tuple:
    if first and second and _concatenates(first[-1], second[0], join_text):
        return first[:-1] + (_concat(first[-1], second[0]),) + second[1:]
    return first + second


def _append(first: tuple, second: Any, join_text: bool) -> tuple:
    return _merge_composites(first, (second,), join_text)


def _prepend(first: Any, second: tuple, join_text: bool) -> tuple:
    return _merge_composites((first,), second, join_text)


for _shape in (Shape.SCALAR, Shape.LIST, Shape.ARRAY, Shape.TEXT):
    register_merge(Shape.COMPOSITE, _shape)(_append)
    register_merge(_shape, Shape.COMPOSITE)(_prepend)


def _merge_sequences(first: Any, second: Any, join_text: bool) -> Any:
    if _concatenates(first, second, join_text):
        return _concat(first, second)
    return (first, second)


for _shape in (Shape.LIST, Shape.ARRAY, Shape.TEXT):
    register_merge(_shape, _shape)(_merge_sequences)


def _pair(first: Any, second: Any, join_text: bool) -> tuple:
    return (first, second)


def merge(first: Any, second: Any, *, join_text: bool = False) -> Any:
    """
    Merge two outputs into one flat value.

    Args:
        first: Output of the left transformer.
        second: Output of the right transformer.
        join_text: Concatenate strings that meet instead of keeping them apart.

    Returns:
        The merged value. Inputs are never mutated.
    """
    rule = MERGE_REGISTRY.get((shape_of(first), shape_of(second)), _pair)
    return rule(first, second, join_text)
