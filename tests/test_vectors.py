import numpy as np
import pytest

from Net_Games.engine.vectors import (
    argmax,
    clamp_negatives,
    normalize,
    normalize_to_policy,
    sample_index,
    softmax,
)


def test_normalize_scales_to_one():
    out = normalize([1.0, 3.0])
    assert out.tolist() == [0.25, 0.75]


def test_normalize_leaves_zero_vector():
    out = normalize([0.0, 0.0, 0.0])
    assert out.tolist() == [0.0, 0.0, 0.0]


def test_normalize_to_policy_falls_back_to_uniform():
    out = normalize_to_policy([0.0, 0.0, 0.0, 0.0])
    assert out.tolist() == [0.25] * 4


def test_clamp_negatives_does_not_modify_input():
    values = np.array([-1.0, 2.0, -0.5])
    out = clamp_negatives(values)
    assert out.tolist() == [0.0, 2.0, 0.0]
    assert values[0] == -1.0


def test_argmax_ties_pick_highest_index():
    assert argmax([3.0, 3.0, 1.0]) == 1
    assert argmax([0.0, 0.0, 0.0]) == 2
    assert argmax([5.0, 1.0, 2.0]) == 0


def test_softmax_sums_to_one_and_orders():
    p = softmax([1.0, 2.0, 3.0], temperature=0.5)
    assert p.sum() == pytest.approx(1.0)
    assert p[2] > p[1] > p[0]


def test_softmax_handles_large_values():
    p = softmax([1000.0, 1000.0])
    assert p.tolist() == pytest.approx([0.5, 0.5])


def test_sample_index_zero_weights_is_uniform(rng):
    draws = np.bincount(
        [sample_index(rng, [0.0, 0.0, 0.0]) for _ in range(3000)], minlength=3
    )
    assert (draws > 850).all()


def test_sample_index_respects_weights(rng):
    draws = np.bincount(
        [sample_index(rng, [1.0, 0.0, 3.0]) for _ in range(4000)], minlength=3
    )
    assert draws[1] == 0
    assert draws[2] / draws.sum() == pytest.approx(0.75, abs=0.05)


def test_sample_index_single_positive_weight(rng):
    assert all(sample_index(rng, [0.0, 0.0, 2.0]) == 2 for _ in range(50))


def test_sample_index_rejects_non_finite(rng):
    with pytest.raises(AssertionError):
        sample_index(rng, [np.nan, 1.0])
