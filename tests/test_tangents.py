import numpy as np
import pytest

from wellenkugel.mesh.surface import sample_partial_u
from wellenkugel.mesh.tangents import (
    CONSTANT_TANGENT,
    TangentMode,
    compute_tangents,
    constant_tangents,
    parametric_tangents,
)
from wellenkugel.mesh.wellenkugel_mesh import WellenkugelMesh


def test_constant_tangents():
    tangents = constant_tangents(7)
    assert tangents.shape == (7, 3)
    assert np.all(tangents == CONSTANT_TANGENT)


def test_default_mode_is_constant():
    tangents = compute_tangents(3, 4)
    assert tangents.shape == (20, 3)
    assert np.all(tangents == (1.0, 0.0, 0.0))


def test_parametric_tangents_are_unit():
    tangents = parametric_tangents(25, 18)
    assert tangents.shape == (26 * 19, 3)
    assert np.allclose(np.linalg.norm(tangents, axis=1), 1.0)


def test_parametric_tangents_follow_du():
    du = sample_partial_u(5, 5).reshape(-1, 3)
    tangents = parametric_tangents(5, 5)
    cos = np.einsum("ij,ij->i", du, tangents) / np.linalg.norm(du, axis=1)
    assert np.allclose(cos, 1.0)


def test_mode_from_string():
    assert TangentMode("parametric") is TangentMode.PARAMETRIC
    assert np.allclose(
        np.linalg.norm(compute_tangents(4, 4, "parametric"), axis=1), 1.0
    )
    with pytest.raises(ValueError):
        compute_tangents(4, 4, "bitangent")


def test_mesh_tangent_buffer():
    mesh = WellenkugelMesh(3, 2)
    assert mesh.tangent_buffer.shape == (4 * 3 * 3,)
    assert mesh.tangent_buffer[:6].tolist() == [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]

    parametric = WellenkugelMesh(3, 2, tangent_mode=TangentMode.PARAMETRIC)
    assert np.allclose(np.linalg.norm(parametric.tangents, axis=1), 1.0)
