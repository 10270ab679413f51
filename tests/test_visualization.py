"""Tests for kinetix_bench.utils.visualization."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import plotly.graph_objects as go
import pytest

from kinetix_bench.utils.visualization import plot_observations, plot_trajectory


class TestPlotTrajectory:
    def test_matplotlib_backend(self):
        t = np.linspace(0, 10, 50)
        y = np.column_stack([np.exp(-t), 1 - np.exp(-t)])
        fig = plot_trajectory(t, y, labels=["A", "B"], backend="matplotlib")
        assert isinstance(fig, plt.Figure)
        assert len(fig.axes[0].lines) == 2
        plt.close(fig)

    def test_plotly_backend(self):
        t = np.linspace(0, 10, 50)
        y = np.column_stack([np.exp(-t), 1 - np.exp(-t)])
        fig = plot_trajectory(t, y, backend="plotly")
        assert isinstance(fig, go.Figure)
        assert fig.data[0].name == "X1"

    def test_one_dimensional(self):
        t = np.linspace(0, 1, 10)
        fig = plot_trajectory(t, t**2)
        assert len(fig.axes[0].lines) == 1
        plt.close(fig)


class TestPlotObservations:
    def test_matplotlib(self, small_result):
        fig = plot_observations(small_result, environment=2, species=1)
        ax = fig.axes[0]
        assert len(ax.lines) == 2
        np.testing.assert_array_equal(ax.lines[1].get_xdata(), small_result.time)
        plt.close(fig)

    def test_observations_from_matching_block(self, small_result):
        fig = plot_observations(small_result, environment=1, species=9)
        L = small_result.time.size
        # Y is the 7th reported block once H1, H2 are masked
        expected = small_result.simulated_data[0, 6 * L : 7 * L]
        np.testing.assert_array_equal(fig.axes[0].lines[1].get_ydata(), expected)
        plt.close(fig)

    def test_plotly(self, small_result):
        fig = plot_observations(small_result, environment=1, species=3, backend="plotly")
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 2

    def test_hidden_species_rejected(self, small_result):
        with pytest.raises(ValueError, match="hidden"):
            plot_observations(small_result, environment=1, species=7)

    def test_explicit_row(self, small_result):
        fig = plot_observations(small_result, environment=2, species=2, row=3)
        L = small_result.time.size
        np.testing.assert_array_equal(
            fig.axes[0].lines[1].get_ydata(), small_result.simulated_data[3, L : 2 * L]
        )
        plt.close(fig)
