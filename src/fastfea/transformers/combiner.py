"""
Parallel composition of two transformers.

A Combiner on its own just calls two transformers with the same input. It
becomes useful together with Pipeline: ``(first | last) + OneHotEncoder()``
encodes the pair of fields as one categorical value.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastfea.config import TransformerConfig
from fastfea.exceptions import CompositionError
from fastfea.transformers.base import Transformer, ensure_transformer, types_compatible
from fastfea.transformers.merge import merge


class Combiner(Transformer):
    """Transformer feeding one sample to two transformers and merging their outputs."""

    def __init__(
        self,
        first: Transformer,
        second: Transformer,
        config: Optional[TransformerConfig] = None,
        **params: Any,
    ):
        """
        Initialize combiner.

        Args:
            first: Left transformer.
            second: Right transformer, consuming the same samples.
            config: Optional name and params.
            **params: ``join_text`` to concatenate string outputs.

        Raises:
            CompositionError: If an operand is not a Transformer, or the two
                declared input types differ.
        """
        self.first = ensure_transformer(first, "combiner left side")
        self.second = ensure_transformer(second, "combiner right side")
        if not (
            types_compatible(first.input_type, second.input_type)
            or types_compatible(second.input_type, first.input_type)
        ):
            raise CompositionError(
                f"Cannot combine '{first.name}' and '{second.name}': "
                f"inputs {first.input_type!r} and {second.input_type!r} differ"
            )
        if config is None:
            config = TransformerConfig(name=f"{first.name}|{second.name}")
        super().__init__(config, ready=False, **params)
        self.input_type = first.input_type if first.input_type is not None else second.input_type

    def default_params(self) -> Dict[str, Any]:
        return {"join_text": False}

    @property
    def ready(self) -> bool:
        return self.first.ready and self.second.ready

    def _observe(self, sample: Any) -> None:
        self.first.observe(sample)
        self.second.observe(sample)

    def _finalize(self) -> None:
        self.first.finalize()
        self.second.finalize()

    def _transform(self, sample: Any) -> Any:
        return merge(
            self.first.transform(sample),
            self.second.transform(sample),
            join_text=bool(self.params["join_text"]),
        )

    def __repr__(self) -> str:
        return f"Combiner(first={self.first!r}, second={self.second!r})"


def combine(*transformers: Transformer, **params: Any) -> Transformer:
    """
    Combine transformers left to right.

    Args:
        *transformers: At least one transformer.
        **params: Combiner params applied at every level.

    Returns:
        ``t1 | t2 | ... | tn``, or ``t1`` itself when only one is given.
    """
    if not transformers:
        raise ValueError("combine() requires at least one transformer")
    result = ensure_transformer(transformers[0], "combine")
    for transformer in transformers[1:]:
        result = Combiner(result, transformer, **params)
    return result
