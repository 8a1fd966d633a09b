"""Triangle mesh container and mesh statistics.

A :class:`Mesh` stores vertex coordinates as a ``float32`` array of shape
``(N, 3)`` and triangles as an ``int32`` array of shape ``(M, 3)`` holding
0-based vertex indices.  The row-major flat views (``mesh.vertices.ravel()``)
are the ``x0 y0 z0 x1 ...`` sequences stored on disk.

:func:`mesh_stats` computes the bounding box, centroid, and edge / face
statistics of a mesh.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..errors import FormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Mesh:
    """Immutable triangle mesh.

    Parameters
    ----------
    vertices : array-like, shape (N, 3) or (3N,)
        Vertex coordinates; converted to ``float32``.  A flat array is
        grouped into ``(x, y, z)`` triples.
    faces : array-like, shape (M, 3) or (3M,)
        Triangle vertex indices; converted to ``int32``.

    Raises
    ------
    ValueError
        If either array cannot be grouped into triples, or a face index is
        outside ``[0, N)``.
    """
    vertices: np.ndarray
    faces: np.ndarray

    def __post_init__(self):
        vertices = _as_triples(self.vertices, np.float32, "vertices")
        faces = _as_triples(self.faces, np.int32, "faces")
        n_verts = vertices.shape[0]
        if faces.size > 0 and (int(faces.max()) >= n_verts or int(faces.min()) < 0):
            raise ValueError(
                f"Face indices out of range [0, {n_verts}): "
                f"min={int(faces.min())}, max={int(faces.max())}."
            )
        vertices.flags.writeable = False
        faces.flags.writeable = False
        object.__setattr__(self, "vertices", vertices)
        object.__setattr__(self, "faces", faces)

    @property
    def num_vertices(self):
        """Number of vertices."""
        return self.vertices.shape[0]

    @property
    def num_faces(self):
        """Number of triangles."""
        return self.faces.shape[0]

    def __repr__(self):
        return f"Mesh(num_vertices={self.num_vertices}, num_faces={self.num_faces})"


def _as_triples(values, dtype, name):
    arr = np.array(values, dtype=dtype)
    if arr.ndim == 1:
        if arr.size % 3 != 0:
            raise ValueError(
                f"{name} has {arr.size} entries, which is not divisible by 3."
            )
        arr = arr.reshape(-1, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(
            f"{name} must be an array of shape (n, 3) or (3n,), got shape {arr.shape}."
        )
    return arr


def check_not_empty(mesh, what="mesh"):
    """Raise :class:`FormatError` if *mesh* has no vertices or no faces."""
    if mesh.num_vertices == 0:
        raise FormatError(f"Cannot compute {what}: mesh has no vertices.")
    if mesh.num_faces == 0:
        raise FormatError(f"Cannot compute {what}: mesh has no faces.")


# ---------------------------------------------------------------------------
# Per-face geometry
# ---------------------------------------------------------------------------

def edge_lengths(mesh):
    """Return the three edge lengths of every face.

    Edges are taken in cyclic order ``v0-v1``, ``v1-v2``, ``v2-v0``.
    Coordinate differences are formed in single precision, the square root
    in double precision, and the result is rounded back to single precision.

    Parameters
    ----------
    mesh : Mesh

    Returns
    -------
    numpy.ndarray, shape (M, 3), dtype float32
    """
    tri = mesh.vertices[mesh.faces]                   # (M, 3, 3)
    diff = tri - np.roll(tri, -1, axis=1)             # v0-v1, v1-v2, v2-v0
    sq = np.sum(diff * diff, axis=2, dtype=np.float32)
    return np.sqrt(sq.astype(np.float64)).astype(np.float32)


def face_areas(mesh, edges=None):
    """Return the area of every face using Heron's formula.

    Parameters
    ----------
    mesh : Mesh
    edges : numpy.ndarray, optional
        Precomputed result of :func:`edge_lengths`.

    Returns
    -------
    numpy.ndarray, shape (M,), dtype float32
    """
    if edges is None:
        edges = edge_lengths(mesh)
    e = edges.astype(np.float64)
    s = e.sum(axis=1) / 2.0
    prod = s * (s - e[:, 0]) * (s - e[:, 1]) * (s - e[:, 2])
    # rounding can push degenerate triangles slightly below zero
    return np.sqrt(np.clip(prod, 0.0, None)).astype(np.float32)


# ---------------------------------------------------------------------------
# Statistics
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False)
class MeshStats:
    """Summary statistics of a triangle mesh.

    Attributes
    ----------
    num_vertices, num_faces, num_edges : int
        Element counts; ``num_edges`` counts every face edge, i.e. it is
        ``3 * num_faces`` (shared edges are counted once per face).
    min, max, mean : numpy.ndarray, shape (3,), dtype float32
        Per-axis bounding box and centroid of the vertex coordinates.
    mean_edge_length, mean_face_area, total_area : float
        Edge and area statistics.
    """
    num_vertices: int
    num_faces: int
    num_edges: int
    min: np.ndarray
    max: np.ndarray
    mean: np.ndarray
    mean_edge_length: float
    mean_face_area: float
    total_area: float

    @property
    def extent(self):
        """Bounding box size along each axis."""
        return self.max - self.min

    def as_dict(self):
        """Return the statistics as a flat ``{name: number}`` mapping.

        Keys are ``numVertices``, ``numFaces``, ``minX`` ... ``maxZ``,
        ``meanX`` ... ``meanZ``, ``numEdges``, ``avgEdgeLength``,
        ``avgFaceArea`` and ``totalArea``.
        """
        out = {"numVertices": self.num_vertices, "numFaces": self.num_faces}
        for i, axis in enumerate("XYZ"):
            out[f"min{axis}"] = float(self.min[i])
            out[f"max{axis}"] = float(self.max[i])
            out[f"mean{axis}"] = float(self.mean[i])
        out["numEdges"] = self.num_edges
        out["avgEdgeLength"] = self.mean_edge_length
        out["avgFaceArea"] = self.mean_face_area
        out["totalArea"] = self.total_area
        return out


def mesh_stats(mesh, *, log=None):
    """Compute basic statistics of a triangle mesh.

    Parameters
    ----------
    mesh : Mesh
        Mesh with at least one vertex and one face.
    log : logging.Logger, optional
        Logger for debug output; defaults to this module's logger.

    Returns
    -------
    MeshStats

    Raises
    ------
    FormatError
        If the mesh has no vertices or no faces.
    """
    log = log or logger
    check_not_empty(mesh, "mesh statistics")

    v = mesh.vertices
    vmin = v.min(axis=0)
    vmax = v.max(axis=0)
    vmean = v.astype(np.float64).mean(axis=0).astype(np.float32)

    edges = edge_lengths(mesh)
    areas = face_areas(mesh, edges)
    total_area = float(np.float32(areas.astype(np.float64).sum()))

    stats = MeshStats(
        num_vertices=mesh.num_vertices,
        num_faces=mesh.num_faces,
        num_edges=int(edges.size),
        min=vmin,
        max=vmax,
        mean=vmean,
        mean_edge_length=float(np.float32(edges.astype(np.float64).mean())),
        mean_face_area=float(np.float32(total_area / mesh.num_faces)),
        total_area=total_area,
    )
    log.debug(
        "mesh_stats: %d vertices, %d faces, min=%s, max=%s.",
        stats.num_vertices, stats.num_faces, vmin, vmax,
    )
    return stats
