"""
Stateful leaf transformers.

These must go through every sample before they can transform anything:

- OneHotEncoder: has to see how many levels a categorical variable has.
- Standardizer: has to see every value to get the global mean and variance.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Any, Dict, Hashable, List, Optional

import numpy as np

from fastfea.config import TransformerConfig
from fastfea.exceptions import UnknownCategoryError
from fastfea.transformers.base import Transformer


logger = logging.getLogger(__name__)


class OneHotEncoder(Transformer):
    """
    1-of-K coding of a discrete value.

    Codes are assigned in first-seen order starting at 0, so a 4-level
    variable is encoded as 1000, 0100, 0010, 0001 in the order the levels
    first appeared.

    Example:
        >>> enc = OneHotEncoder()
        >>> for value in ["b", "a", "b"]:
        ...     enc.observe(value)
        >>> enc.finalize()
        >>> enc.transform("a")
        array([0., 1.])
    """

    output_type = np.ndarray

    def __init__(self, config: Optional[TransformerConfig] = None, **params: Any):
        super().__init__(config, ready=False, **params)
        self._codes: Dict[Hashable, int] = {}
        self._count = 0

    def default_params(self) -> Dict[str, Any]:
        return {"dtype": "float64"}

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = super().validate_params(params)
        params["dtype"] = np.dtype(params["dtype"])
        return params

    @property
    def categories(self) -> List[Hashable]:
        """Observed values in code order."""
        return list(self._codes)

    @property
    def num_categories(self) -> int:
        return self._count

    def code_of(self, value: Hashable) -> int:
        """
        Get the integer code assigned to ``value``.

        Raises:
            UnknownCategoryError: If ``value`` was never observed.
        """
        try:
            return self._codes[value]
        except KeyError:
            raise UnknownCategoryError(f"Encoder '{self.name}' has no category {value!r}") from None

    def _observe(self, sample: Hashable) -> None:
        if sample not in self._codes:
            self._codes[sample] = len(self._codes)

    def _finalize(self) -> None:
        self._count = len(self._codes)
        logger.debug(f"Encoder '{self.name}' finalized with {self._count} categories")

    def _transform(self, sample: Hashable) -> np.ndarray:
        code = self.code_of(sample)
        output = np.zeros(self._count, dtype=self.params["dtype"])
        output[code] = 1.0
        return output


class Standardizer(Transformer):
    """
    Standardize a numeric feature by its global mean and standard deviation.

    Statistics are accumulated with Welford's algorithm, so a single pass over
    the samples is enough. A zero deviation is replaced by 1.0 so constant
    features map to 0.
    """

    input_type = numbers.Real
    output_type = float

    def __init__(self, config: Optional[TransformerConfig] = None, **params: Any):
        super().__init__(config, ready=False, **params)
        self._n = 0
        self._mean = 0.0
        self._m2 = 0.0
        self.mean_: Optional[float] = None
        self.scale_: Optional[float] = None

    def default_params(self) -> Dict[str, Any]:
        return {"ddof": 0}

    def validate_params(self, params: Dict[str, Any]) -> Dict[str, Any]:
        params = super().validate_params(params)
        if int(params["ddof"]) < 0:
            raise ValueError(f"ddof must be non-negative, got {params['ddof']}")
        params["ddof"] = int(params["ddof"])
        return params

    @property
    def num_samples(self) -> int:
        return self._n

    def _observe(self, sample: float) -> None:
        x = float(sample)
        self._n += 1
        delta = x - self._mean
        self._mean += delta / self._n
        self._m2 += delta * (x - self._mean)

    def _finalize(self) -> None:
        ddof = self.params["ddof"]
        if self._n <= ddof:
            raise ValueError(
                f"Standardizer '{self.name}' needs more than {ddof} samples, observed {self._n}"
            )
        std = math.sqrt(self._m2 / (self._n - ddof))
        self.mean_ = self._mean
        self.scale_ = std if std > 0.0 else 1.0
        logger.debug(
            f"Standardizer '{self.name}' finalized over {self._n} samples "
            f"(mean={self.mean_:.6g}, scale={self.scale_:.6g})"
        )

    def _transform(self, sample: float) -> float:
        return (float(sample) - self.mean_) / self.scale_
