"""
Tests for Pipeline (sequential composition).
"""

from typing import Any, Dict, List, Optional

import numpy as np
import pytest

from fastfea.exceptions import CompositionError, NotReadyError
from fastfea.transformers import LazyTransformer, OneHotEncoder, Pipeline, Standardizer, chain


class RecordingEncoder(OneHotEncoder):
    """OneHotEncoder that remembers the order of observed values."""

    def __init__(self):
        super().__init__()
        self.seen = []

    def _observe(self, sample):
        self.seen.append(sample)
        super()._observe(sample)


class TestPipeline:
    """Tests for Pipeline class."""

    def test_lazy_chain(self, firstname, record):
        """Test chaining two lazy transformers."""
        length = LazyTransformer(len)
        pipe = firstname + length

        assert pipe.ready is True
        assert firstname.transform(record) == "Michael"
        assert pipe.transform(record) == 7

    def test_then_is_plus(self, firstname, record):
        """Test the named form of sequential composition."""
        pipe = firstname.then(LazyTransformer(str.upper))

        assert isinstance(pipe, Pipeline)
        assert pipe.transform(record) == "MICHAEL"

    def test_transform_is_composition(self, names_dataset, firstname):
        """Test pipeline.transform(x) == B.transform(A.transform(x))."""
        encoder = OneHotEncoder()
        pipe = firstname + encoder
        for sample in names_dataset:
            pipe.observe(sample)
        pipe.finalize()

        for sample in names_dataset:
            np.testing.assert_array_equal(
                pipe.transform(sample), encoder.transform(firstname.transform(sample))
            )

    def test_ready_upstream_feeds_downstream_directly(self, names_dataset, lastname):
        """Test that nothing is buffered when the upstream transformer is ready."""
        pipe = lastname + OneHotEncoder()
        for sample in names_dataset:
            pipe.observe(sample)

        assert pipe.buffered == 0
        assert pipe.ready is False

        pipe.finalize()
        np.testing.assert_array_equal(pipe.transform(names_dataset[1]), [0.0, 1.0])

    def test_buffers_until_upstream_finalizes(self):
        """Test buffer-and-replay when the upstream transformer is stateful."""
        upstream = OneHotEncoder()
        downstream = RecordingEncoder()
        pipe = upstream + LazyTransformer(lambda v: int(v.argmax())) + downstream
        values = ["x", "y", "x", "z"]

        for value in values:
            pipe.observe(value)

        assert pipe.first.buffered == 0
        assert pipe.buffered == len(values)
        assert downstream.seen == []

        pipe.finalize()

        assert pipe.buffered == 0
        assert downstream.seen == [0, 1, 0, 2]
        np.testing.assert_array_equal(pipe.transform("z"), [0.0, 0.0, 1.0])

    def test_replay_preserves_arrival_order(self):
        """Test that buffered samples reach the downstream in arrival order."""
        downstream = RecordingEncoder()
        pipe = Standardizer() + LazyTransformer(lambda x: round(x, 6)) + downstream
        for value in [3.0, 1.0, 2.0]:
            pipe.observe(value)
        pipe.finalize()

        expected = [round(v, 6) for v in (1.224745, -1.224745, 0.0)]
        assert downstream.seen == pytest.approx(expected, abs=1e-5)

    def test_nested_unready_upstream(self):
        """Test a pipeline whose upstream is itself a not-ready pipeline."""
        inner = LazyTransformer(str.lower) + OneHotEncoder()
        downstream = RecordingEncoder()
        outer = inner + LazyTransformer(lambda v: int(v.argmax())) + downstream
        words = ["A", "b", "a", "C", "B"]

        for word in words:
            outer.observe(word)
        outer.finalize()

        assert outer.ready is True
        assert inner.ready is True
        assert downstream.seen == [0, 1, 0, 2, 1]
        np.testing.assert_array_equal(outer.transform("c"), [0.0, 0.0, 1.0])

    def test_observe_after_finalize_ignored(self, firstname, names_dataset):
        """Test that a ready pipeline stops learning."""
        encoder = OneHotEncoder()
        pipe = firstname + encoder
        for sample in names_dataset:
            pipe.observe(sample)
        pipe.finalize()

        pipe.observe({"firstname": "Scottie", "lastname": "Pippen"})

        assert encoder.num_categories == 2
        assert pipe.buffered == 0

    def test_finalize_idempotent(self, firstname, names_dataset):
        """Test that finalizing twice equals finalizing once."""
        pipe = firstname + OneHotEncoder()
        for sample in names_dataset:
            pipe.observe(sample)
        pipe.finalize()
        first = [pipe.transform(s) for s in names_dataset]

        pipe.finalize()

        for before, sample in zip(first, names_dataset):
            np.testing.assert_array_equal(pipe.transform(sample), before)

    def test_transform_before_finalize(self, firstname, record):
        """Test unready use of a pipeline."""
        pipe = firstname + OneHotEncoder()
        pipe.observe(record)

        with pytest.raises(NotReadyError):
            pipe.transform(record)

    def test_ready_downstream_with_unready_upstream(self):
        """Test the shape where only the downstream side is ready."""
        encoder = OneHotEncoder()
        pipe = encoder + LazyTransformer(lambda v: v.tolist())

        for value in ["a", "b"]:
            pipe.observe(value)

        assert pipe.buffered == 0
        pipe.finalize()
        assert pipe.transform("b") == [0.0, 1.0]

    def test_type_mismatch_rejected(self):
        """Test that declared incompatible types are rejected at composition time."""

        def name_of(record: dict) -> str:
            return record["firstname"]

        with pytest.raises(CompositionError, match="Cannot chain"):
            LazyTransformer(name_of) + Standardizer()

    def test_compatible_declared_types(self):
        """Test that a subclass output feeds a declared base input."""

        def length(text: str) -> int:
            return len(text)

        pipe = LazyTransformer(length) + Standardizer()
        for word in ["a", "abc"]:
            pipe.observe(word)
        pipe.finalize()

        assert pipe.transform("ab") == pytest.approx(0.0)

    def test_generic_output_feeds_plain_input(self):
        """Test that List[str] is checked as list."""

        def tokens(text: str) -> List[str]:
            return text.split()

        def count(items: list) -> int:
            return len(items)

        pipe = LazyTransformer(tokens) + LazyTransformer(count)

        assert pipe.transform("a b c") == 3

    def test_generic_mismatch_rejected(self):
        """Test that generic aliases are still checked by their origin."""

        def tokens(text: str) -> List[str]:
            return text.split()

        def keys(mapping: Dict[str, Any]) -> list:
            return list(mapping)

        with pytest.raises(CompositionError, match="Cannot chain"):
            LazyTransformer(tokens) + LazyTransformer(keys)

    def test_optional_types_unknown(self):
        """Test that unions are treated as undeclared."""

        def maybe_length(text: Optional[str]) -> Optional[int]:
            return None if text is None else len(text)

        pipe = LazyTransformer(str.strip) + LazyTransformer(maybe_length) + Standardizer()
        for word in [" a ", "abc"]:
            pipe.observe(word)
        pipe.finalize()

        assert pipe.transform("ab") == pytest.approx(0.0)

    def test_unready_combiner_upstream(self, names_dataset, firstname, lastname):
        """Test buffer-and-replay when the upstream is a not-ready Combiner."""

        def hot_positions(vector):
            return tuple(int(i) for i in np.flatnonzero(vector))

        downstream = RecordingEncoder()
        encoded = (firstname + OneHotEncoder()) | (lastname + OneHotEncoder())
        pipe = encoded + LazyTransformer(hot_positions) + downstream

        for sample in names_dataset:
            pipe.observe(sample)

        assert encoded.ready is False
        assert pipe.buffered == len(names_dataset)
        assert downstream.seen == []

        pipe.finalize()

        assert pipe.buffered == 0
        assert downstream.seen == [(0, 2), (0, 3), (1, 2), (1, 3)]
        np.testing.assert_array_equal(pipe.transform(names_dataset[3]), [0.0, 0.0, 0.0, 1.0])

    def test_non_transformer_operand(self, firstname):
        """Test composing with something that is not a Transformer."""
        with pytest.raises(CompositionError):
            Pipeline(firstname, len)
        with pytest.raises(TypeError):
            firstname + len

    def test_chain(self, record):
        """Test n-ary chaining."""
        pipe = chain(
            LazyTransformer(lambda s: s["lastname"]),
            LazyTransformer(str.upper),
            LazyTransformer(len),
        )

        assert pipe.transform(record) == 6
        with pytest.raises(ValueError):
            chain()

    def test_repr(self, firstname):
        """Test string representation."""
        pipe = firstname + OneHotEncoder()
        assert "Pipeline" in repr(pipe)
        assert "OneHotEncoder" in repr(pipe)
