"""
Composable feature transformers.

Transformers are combined with two operators:
- ``a + b`` (``a.then(b)``): Pipeline, ``b`` consumes ``a``'s output
- ``a | b`` (``a.alongside(b)``): Combiner, both consume the same sample and
  their outputs are merged into one flat value

Both return a Transformer, so compositions nest without limit.
"""

from fastfea.transformers.base import Transformer, types_compatible
from fastfea.transformers.lazy import LazyTransformer, lazy
from fastfea.transformers.encoders import OneHotEncoder, Standardizer
from fastfea.transformers.pipeline import Pipeline, chain
from fastfea.transformers.combiner import Combiner, combine
from fastfea.transformers.merge import Shape, merge, shape_of

__all__ = [
    "Transformer",
    "LazyTransformer",
    "lazy",
    "OneHotEncoder",
    "Standardizer",
    "Pipeline",
    "chain",
    "Combiner",
    "combine",
    "Shape",
    "merge",
    "shape_of",
    "types_compatible",
]
