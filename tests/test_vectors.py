"""Tests for HDC-EMG hypervector algebra."""

import pytest
import torch

from hdc_emg.errors import DimensionMismatchError
from hdc_emg.vectors import (
    BipolarHypervector,
    BundleAccumulator,
    IntegerHypervector,
    RealHypervector,
    Representation,
    bind,
    bundle,
    distance,
    get_vector_type,
    permute,
)

ALL_TYPES = [BipolarHypervector, IntegerHypervector, RealHypervector]


def random_vector(vector_type, dim=10000, seed=0):
    return vector_type.random(dim, torch.Generator().manual_seed(seed))


@pytest.mark.parametrize("vector_type", ALL_TYPES)
class TestAlgebra:
    """Properties shared by every representation."""

    def test_self_distance_is_zero(self, vector_type):
        """Test that a vector is at distance 0 from itself."""
        v = random_vector(vector_type)
        assert distance(v, v) == 0.0

    def test_random_vectors_near_orthogonal(self, vector_type):
        """Test that independent vectors sit around distance 0.5."""
        a = random_vector(vector_type, seed=1)
        b = random_vector(vector_type, seed=2)
        assert 0.45 < distance(a, b) < 0.55

    def test_distance_in_unit_interval(self, vector_type):
        """Test that distance to the negated vector is 1."""
        a = random_vector(vector_type)
        opposite = a.negate(torch.arange(a.dim))
        assert distance(a, opposite) == pytest.approx(1.0)

    def test_permute_zero_is_identity(self, vector_type):
        """Test that permuting by 0 returns an equal vector."""
        v = random_vector(vector_type)
        assert permute(v, 0) == v

    def test_permute_rotates(self, vector_type):
        """Test cyclic rotation and its inverse."""
        v = random_vector(vector_type)
        rotated = permute(v, 3)
        assert torch.equal(rotated.data, torch.roll(v.data, 3))
        assert permute(rotated, -3) == v

    def test_permute_does_not_mutate(self, vector_type):
        """Test that permutation leaves the operand untouched."""
        v = random_vector(vector_type)
        before = v.data.clone()
        permute(v, 5)
        assert torch.equal(v.data, before)

    def test_bind_dissimilar_to_inputs(self, vector_type):
        """Test that binding produces a vector unlike both operands."""
        a = random_vector(vector_type, seed=1)
        b = random_vector(vector_type, seed=2)
        c = bind(a, b)
        assert distance(c, a) > 0.4
        assert distance(c, b) > 0.4

    def test_bind_self_inverse(self, vector_type):
        """Test that unbinding recovers the original vector."""
        a = random_vector(vector_type, seed=1)
        b = random_vector(vector_type, seed=2)
        recovered = bind(bind(a, b), b)
        # cosine > 0.5 for real vectors, exact for bipolar and integer
        assert distance(recovered, a) < 0.25

    def test_bundle_similar_to_inputs(self, vector_type):
        """Test that a bundle stays close to each of its inputs."""
        vectors = [random_vector(vector_type, seed=s) for s in range(3)]
        bundled = bundle(vectors)
        other = random_vector(vector_type, seed=99)
        for v in vectors:
            assert distance(bundled, v) < distance(bundled, other)

    def test_bundle_empty_fails(self, vector_type):
        """Test that bundling nothing is rejected."""
        with pytest.raises(ValueError):
            vector_type.bundle([])
        with pytest.raises(ValueError):
            bundle([])

    def test_dimension_mismatch_fails(self, vector_type):
        """Test that vectors of different dimension cannot be combined."""
        a = random_vector(vector_type, dim=100)
        b = random_vector(vector_type, dim=200)
        with pytest.raises(DimensionMismatchError):
            bind(a, b)
        with pytest.raises(DimensionMismatchError):
            bundle([a, b])
        with pytest.raises(DimensionMismatchError):
            distance(a, b)

    def test_accumulator_matches_bundle(self, vector_type):
        """Test that the running sum equals bundle over the same vectors."""
        vectors = [random_vector(vector_type, seed=s) for s in range(5)]
        accumulator = BundleAccumulator(vector_type)
        for v in vectors:
            accumulator.add(v)
        assert accumulator.count == 5
        assert torch.allclose(
            accumulator.result().data.double(), bundle(vectors).data.double(), atol=1e-4,
        )


class TestRepresentations:
    """Representation-specific behaviour."""

    def test_representation_mismatch_fails(self):
        """Test that bipolar and integer vectors cannot be bound."""
        a = random_vector(BipolarHypervector, dim=100)
        b = random_vector(IntegerHypervector, dim=100)
        with pytest.raises(DimensionMismatchError):
            bind(a, b)

    def test_bipolar_elements(self):
        """Test that random bipolar vectors only hold -1 and +1."""
        v = random_vector(BipolarHypervector)
        assert set(v.data.unique().tolist()) == {-1, 1}

    def test_bipolar_bundle_tie_resolves_positive(self):
        """Test majority vote with ties going to +1."""
        a = BipolarHypervector(torch.tensor([1, -1, 1, -1]))
        b = BipolarHypervector(torch.tensor([-1, -1, 1, 1]))
        assert bundle([a, b]).data.tolist() == [1, -1, 1, 1]

    def test_bipolar_bundle_majority(self):
        """Test that three vectors bundle to their majority."""
        a = BipolarHypervector(torch.tensor([1, 1, -1]))
        b = BipolarHypervector(torch.tensor([1, -1, -1]))
        c = BipolarHypervector(torch.tensor([-1, -1, 1]))
        assert bundle([a, b, c]).data.tolist() == [1, -1, -1]

    def test_bipolar_bind_exact_inverse(self):
        """Test that bipolar binding is exactly self-inverse."""
        a = random_vector(BipolarHypervector, seed=1)
        b = random_vector(BipolarHypervector, seed=2)
        assert bind(bind(a, b), b) == a

    def test_integer_bundle_keeps_sum(self):
        """Test that integer bundling keeps raw counts."""
        a = IntegerHypervector(torch.tensor([1, -1, 1]))
        b = IntegerHypervector(torch.tensor([1, 1, 1]))
        assert bundle([a, b]).data.tolist() == [2, 0, 2]

    def test_hamming_distance(self):
        """Test normalized Hamming distance for bipolar vectors."""
        a = BipolarHypervector(torch.tensor([1, 1, 1, 1]))
        b = BipolarHypervector(torch.tensor([1, -1, 1, -1]))
        assert distance(a, b) == 0.5

    def test_real_unbinding_threshold(self):
        """Test that real unbinding keeps cosine similarity above 0.5."""
        a = random_vector(RealHypervector, seed=1)
        b = random_vector(RealHypervector, seed=2)
        recovered = bind(bind(a, b), b)
        cosine = 1.0 - 2.0 * distance(recovered, a)
        assert cosine > 0.5

    def test_zero_vector_counts_as_orthogonal(self):
        """Test that a zero-norm vector is at distance 0.5."""
        zero = IntegerHypervector(torch.zeros(8, dtype=torch.int32))
        v = IntegerHypervector(torch.ones(8, dtype=torch.int32))
        assert distance(zero, v) == 0.5

    def test_constructor_copies_input(self):
        """Test that writing the source tensor leaves the vector unchanged."""
        source = torch.ones(8, dtype=torch.int8)
        v = BipolarHypervector(source)
        source[0] = -1
        assert torch.equal(v.data, torch.ones(8, dtype=torch.int8))

    def test_rejects_non_1d_data(self):
        """Test that vectors must be one-dimensional."""
        with pytest.raises(ValueError):
            BipolarHypervector(torch.ones(2, 2))

    def test_get_vector_type_aliases(self):
        """Test name resolution including reference aliases."""
        assert get_vector_type("bin") is BipolarHypervector
        assert get_vector_type("int") is IntegerHypervector
        assert get_vector_type("float") is RealHypervector
        assert get_vector_type(Representation.REAL) is RealHypervector
        with pytest.raises(ValueError):
            get_vector_type("complex")
