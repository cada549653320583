import math

import numpy as np
import pytest

from wellenkugel.mesh.surface import (
    DEFAULT_STEPS,
    U_MAX,
    V_MAX,
    DegenerateResolutionError,
    evaluate,
    parameter_values,
    partial_u,
    sample_grid,
    validate_resolution,
)


class TestEvaluate:
    def test_origin_at_u_zero(self):
        for v in (0.0, 1.0, V_MAX):
            x, y, z = evaluate(0.0, v)
            assert x == 0.0 and y == 0.0 and z == 0.0

    def test_formula(self):
        u, v = 3.0, 0.75
        x, y, z = evaluate(u, v)
        assert x == pytest.approx(u * math.cos(math.cos(u)) * math.cos(v))
        assert y == pytest.approx(u * math.cos(math.cos(u)) * math.sin(v))
        assert z == pytest.approx(u * math.sin(math.cos(u)))

    def test_partial_u_matches_finite_difference(self):
        u, v, h = 5.3, 2.1, 1e-6
        forward = np.array(evaluate(u + h, v))
        backward = np.array(evaluate(u - h, v))
        numeric = (forward - backward) / (2 * h)
        assert np.allclose(partial_u(u, v), numeric, atol=1e-5)


class TestSampling:
    def test_sample_counts(self):
        grid = sample_grid(3, 5)
        assert grid.shape == (4, 6, 3)

    def test_default_resolution(self):
        grid = sample_grid()
        assert grid.shape == (DEFAULT_STEPS + 1, DEFAULT_STEPS + 1, 3)

    def test_parameter_range(self):
        us, vs = parameter_values(50, 50)
        assert len(us) == 51 and len(vs) == 51
        assert us[0] == 0.0 and vs[0] == 0.0
        assert us[-1] == pytest.approx(U_MAX)
        assert vs[-1] == pytest.approx(V_MAX)

    def test_samples_are_exact_surface_points(self):
        us, vs = parameter_values(7, 4)
        grid = sample_grid(7, 4)
        for i, u in enumerate(us):
            for j, v in enumerate(vs):
                assert tuple(grid[i, j]) == evaluate(u, v)

    def test_sampling_is_deterministic(self):
        assert np.array_equal(sample_grid(20, 13), sample_grid(20, 13))

    def test_grid_is_read_only(self):
        grid = sample_grid(2, 2)
        with pytest.raises(ValueError):
            grid[0, 0, 0] = 1.0

    def test_single_cell(self):
        grid = sample_grid(1, 1)
        assert grid.shape == (2, 2, 3)
        assert tuple(grid[1, 1]) == evaluate(U_MAX, V_MAX)


class TestResolution:
    @pytest.mark.parametrize("u_steps, v_steps", [(0, 10), (10, 0), (-1, 5), (5, -3)])
    def test_non_positive_rejected(self, u_steps, v_steps):
        with pytest.raises(DegenerateResolutionError):
            sample_grid(u_steps, v_steps)

    @pytest.mark.parametrize("steps", [2.5, "10", None, True])
    def test_non_integer_rejected(self, steps):
        with pytest.raises(DegenerateResolutionError):
            validate_resolution(steps, 10)

    def test_error_is_value_error(self):
        with pytest.raises(ValueError) as info:
            validate_resolution(0, 3)
        assert info.value.u_steps == 0
        assert info.value.v_steps == 3

    def test_numpy_integers_accepted(self):
        assert validate_resolution(np.int64(4), np.int32(2)) == (4, 2)
