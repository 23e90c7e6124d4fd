"""
Sequential composition of two transformers.

The downstream transformer consumes the upstream transformer's output. When
the upstream one still has to learn, the downstream one cannot be fed yet, so
raw samples are buffered and replayed through the upstream transform once it
is finalized.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Deque, Optional

from fastfea.config import TransformerConfig
from fastfea.exceptions import CompositionError
from fastfea.transformers.base import Transformer, ensure_transformer, types_compatible


logger = logging.getLogger(__name__)


class Pipeline(Transformer):
    """
    Transformer chaining ``first`` into ``second``.

    Example:
        >>> from fastfea.transformers import LazyTransformer, OneHotEncoder
        >>> pipe = LazyTransformer(str.lower) + OneHotEncoder()
        >>> for word in ["A", "b", "a"]:
        ...     pipe.observe(word)
        >>> pipe.finalize()
        >>> pipe.transform("B")
        array([0., 1.])
    """

    def __init__(
        self,
        first: Transformer,
        second: Transformer,
        config: Optional[TransformerConfig] = None,
    ):
        """
        Initialize pipeline.

        Args:
            first: Upstream transformer.
            second: Downstream transformer fed with ``first``'s output.
            config: Optional name.

        Raises:
            CompositionError: If an operand is not a Transformer, or if the
                declared output of ``first`` does not fit the declared input
                of ``second``.
        """
        self.first = ensure_transformer(first, "pipeline upstream")
        self.second = ensure_transformer(second, "pipeline downstream")
        if not types_compatible(first.output_type, second.input_type):
            raise CompositionError(
                f"Cannot chain '{first.name}' into '{second.name}': "
                f"output {first.output_type!r} does not match input {second.input_type!r}"
            )
        if config is None:
            config = TransformerConfig(name=f"{first.name}+{second.name}")
        super().__init__(config, ready=False)
        self.input_type = first.input_type
        self.output_type = second.output_type
        self._buffer: Deque[Any] = deque()

    @property
    def ready(self) -> bool:
        return self.first.ready and self.second.ready

    @property
    def buffered(self) -> int:
        """Number of raw samples waiting for the upstream transformer to finalize."""
        return len(self._buffer)

    def _observe(self, sample: Any) -> None:
        if self.first.ready:
            self.second.observe(self.first.transform(sample))
            return
        self.first.observe(sample)
        if not self.second.ready:
            self._buffer.append(sample)

    def _finalize(self) -> None:
        self.first.finalize()
        if not self.second.ready:
            if self._buffer:
                logger.debug(f"Pipeline '{self.name}' replaying {len(self._buffer)} buffered samples")
            while self._buffer:
                self.second.observe(self.first.transform(self._buffer.popleft()))
            self.second.finalize()

    def finalize(self) -> None:
        super().finalize()
        self._buffer.clear()

    def _transform(self, sample: Any) -> Any:
        return self.second.transform(self.first.transform(sample))

    def __repr__(self) -> str:
        return f"Pipeline(first={self.first!r}, second={self.second!r}, buffered={self.buffered})"


def chain(*transformers: Transformer) -> Transformer:
    """
    Chain transformers left to right.

    Args:
        *transformers: At least one transformer.

    Returns:
        ``t1 + t2 + ... + tn``, or ``t1`` itself when only one is given.
    """
    if not transformers:
        raise ValueError("chain() requires at least one transformer")
    result = ensure_transformer(transformers[0], "chain")
    for transformer in transformers[1:]:
        result = Pipeline(result, transformer)
    return result
