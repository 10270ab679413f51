"""Tests for hidden-species masking."""

from __future__ import annotations

import numpy as np
import pytest

from kinetix_bench.exceptions import ValidationError
from kinetix_bench.simulation.masking import hidden_columns, mask_hidden, remap_target


class TestHiddenColumns:
    def test_blocks_7_and_8(self):
        np.testing.assert_array_equal(hidden_columns((7, 8), 5), np.arange(30, 40))

    def test_unsorted_input(self):
        np.testing.assert_array_equal(hidden_columns((8, 7), 2), [12, 13, 14, 15])

    def test_nothing_hidden(self):
        assert hidden_columns((), 5).size == 0


class TestRemapTarget:
    def test_target_after_hidden(self):
        assert remap_target(9, (7, 8)) == 7

    def test_target_before_hidden(self):
        assert remap_target(3, (7, 8)) == 3

    def test_hidden_target_rejected(self):
        with pytest.raises(ValidationError):
            remap_target(7, (7, 8))


class TestMaskHidden:
    def test_shape_and_target(self):
        L = 5
        data = np.arange(4 * 9 * L, dtype=float).reshape(4, 9 * L)
        masked, target = mask_hidden(data, L, (7, 8), 9)
        assert masked.shape == (4, 7 * L)
        assert target == 7

    def test_remaining_blocks(self):
        L = 3
        data = np.arange(2 * 9 * L, dtype=float).reshape(2, 9 * L)
        masked, _ = mask_hidden(data, L, (7, 8), 9)
        np.testing.assert_array_equal(masked[:, : 6 * L], data[:, : 6 * L])
        np.testing.assert_array_equal(masked[:, 6 * L :], data[:, 8 * L :])

    def test_input_untouched(self):
        data = np.ones((2, 18))
        mask_hidden(data, 2, (7, 8), 9)
        assert data.shape == (2, 18)

    def test_wrong_block_width(self):
        with pytest.raises(ValidationError):
            mask_hidden(np.ones((2, 10)), 3, (7, 8), 9)

    def test_hidden_out_of_range(self):
        with pytest.raises(ValidationError):
            mask_hidden(np.ones((2, 6)), 2, (7,), 1)
