"""Synthetic meshes for examples, demos and tests."""

import numpy as np

from .mesh import Mesh


def generate_cube():
    """Return the cube with corners at (+-1, +-1, +-1).

    The cube has 8 vertices and 12 triangles, two per side, so its total
    surface area is 24.

    Returns
    -------
    Mesh
    """
    vertices = np.array([
        [ 1.0,  1.0,  1.0],
        [ 1.0,  1.0, -1.0],
        [ 1.0, -1.0,  1.0],
        [ 1.0, -1.0, -1.0],
        [-1.0,  1.0,  1.0],
        [-1.0,  1.0, -1.0],
        [-1.0, -1.0,  1.0],
        [-1.0, -1.0, -1.0],
    ], dtype=np.float32)
    faces = np.array([
        [0, 2, 3], [3, 1, 0],
        [4, 6, 7], [7, 5, 4],
        [0, 4, 5], [5, 1, 0],
        [2, 6, 7], [7, 3, 2],
        [0, 4, 6], [6, 2, 0],
        [1, 5, 7], [7, 3, 1],
    ], dtype=np.int32)
    return Mesh(vertices, faces)


def generate_sphere(radius=1.0, slices=16, stacks=8):
    """Return a UV sphere centered at the origin.

    Vertices are laid out on ``stacks + 1`` rings of ``slices + 1`` points
    each (the seam and the poles are duplicated), giving
    ``(stacks + 1) * (slices + 1)`` vertices and ``2 * stacks * slices``
    triangles.  Triangles touching a pole are degenerate.

    Parameters
    ----------
    radius : float, optional
        Sphere radius.
    slices : int, optional
        Number of divisions around the z axis.
    stacks : int, optional
        Number of divisions from pole to pole.

    Returns
    -------
    Mesh

    Raises
    ------
    ValueError
        If *slices* or *stacks* is smaller than 1.
    """
    if slices < 1 or stacks < 1:
        raise ValueError(f"slices and stacks must be >= 1, got {slices} and {stacks}.")
    phi = np.arange(stacks + 1, dtype=np.float64) * np.pi / stacks
    theta = np.arange(slices + 1, dtype=np.float64) * 2 * np.pi / slices
    phi, theta = np.meshgrid(phi, theta, indexing="ij")
    vertices = radius * np.stack(
        (np.cos(theta) * np.sin(phi), np.sin(theta) * np.sin(phi), np.cos(phi)),
        axis=-1,
    ).reshape(-1, 3)

    ring = slices + 1
    i, j = np.meshgrid(np.arange(stacks), np.arange(slices), indexing="ij")
    i, j = i.ravel(), j.ravel()
    lower = (i + 1) * ring + j
    upper = i * ring + j
    faces = np.empty((2 * i.size, 3), dtype=np.int32)
    faces[0::2] = np.column_stack((lower, upper, upper + 1))
    faces[1::2] = np.column_stack((lower, upper + 1, lower + 1))
    return Mesh(vertices, faces)
