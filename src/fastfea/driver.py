"""
Driver loop for fitting transformers over a dataset.

The protocol every transformer expects from its caller:

1. ``observe`` every sample of the dataset, in one pass
2. ``finalize`` once
3. ``transform`` samples

``fit`` runs steps 1 and 2; ``fit_transform`` runs all three.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Iterable, List

from fastfea.transformers.base import Transformer


logger = logging.getLogger(__name__)


def fit(transformer: Transformer, samples: Iterable[Any]) -> Transformer:
    """
    Observe every sample, then finalize.

    Args:
        transformer: Transformer (or composition) to fit.
        samples: Dataset to pass over once.

    Returns:
        The same transformer, now ready.
    """
    logger.info(f"Fitting '{transformer.name}'")
    start = time.perf_counter()
    count = 0
    for sample in samples:
        transformer.observe(sample)
        count += 1
    transformer.finalize()
    elapsed = time.perf_counter() - start
    logger.info(f"Fitted '{transformer.name}' on {count} samples in {elapsed:.3f}s")
    return transformer


def transform_all(transformer: Transformer, samples: Iterable[Any]) -> List[Any]:
    """Transform every sample with a ready transformer."""
    return [transformer.transform(sample) for sample in samples]


def fit_transform(transformer: Transformer, samples: Iterable[Any]) -> List[Any]:
    """
    Fit on ``samples`` and transform them.

    ``samples`` is materialized first since it is read twice.

    Args:
        transformer: Transformer (or composition) to fit.
        samples: Dataset.

    Returns:
        One output per sample, in dataset order.
    """
    samples = list(samples)
    fit(transformer, samples)
    return transform_all(transformer, samples)
