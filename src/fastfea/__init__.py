"""
fastfea: composable feature transformers.

Transformers turn raw samples into numeric features. Some must first see the
whole dataset to learn their parameters (e.g. a one-hot encoder counting
levels); others are plain functions. Pipelines (``+``) and Combiners (``|``)
compose them into a single transformer that is fitted in one pass.
"""

__version__ = "0.1.0"

from fastfea.config import TransformerConfig
from fastfea.driver import fit, fit_transform, transform_all
from fastfea.exceptions import CompositionError, FastFeaError, NotReadyError, UnknownCategoryError
from fastfea.transformers import (
    Combiner,
    LazyTransformer,
    OneHotEncoder,
    Pipeline,
    Standardizer,
    Transformer,
    chain,
    combine,
    lazy,
    merge,
)

__all__ = [
    "TransformerConfig",
    "Transformer",
    "LazyTransformer",
    "lazy",
    "OneHotEncoder",
    "Standardizer",
    "Pipeline",
    "chain",
    "Combiner",
    "combine",
    "merge",
    "fit",
    "fit_transform",
    "transform_all",
    "FastFeaError",
    "NotReadyError",
    "UnknownCategoryError",
    "CompositionError",
    "__version__",
]
