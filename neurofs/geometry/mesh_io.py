"""ASCII mesh writers for common open formats.

This module serialises a :class:`~neurofs.geometry.mesh.Mesh` to:

* **PLY**: Stanford PLY, ASCII encoding, 0-based triangle indices
* **OBJ**: Wavefront OBJ, 1-based triangle indices
* **STL**: ASCII StereoLithography with per-facet normals

All writers return the complete file content as a ``str``; coordinates are
printed with ``%f`` (6 decimals).  The public dispatcher
:func:`mesh_to_string` selects the writer by format name and
:func:`export_mesh` additionally writes the text to disk.
"""

import logging

import numpy as np

from ..errors import FormatError
from ..utils.types import ExportFormat
from .mesh import check_not_empty

logger = logging.getLogger(__name__)

_COMMENT = "neurofs"


def _vertex_lines(vertices, prefix=""):
    return [f"{prefix}{x:f} {y:f} {z:f}" for x, y, z in vertices.tolist()]


def _join(lines):
    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# PLY writer
# ---------------------------------------------------------------------------

def to_ply(mesh):
    """Serialise a mesh as ASCII PLY.

    Parameters
    ----------
    mesh : Mesh
        Mesh with at least one vertex and one face.

    Returns
    -------
    str
        PLY header, one ``x y z`` line per vertex and one ``3 i j k`` line
        per face.

    Raises
    ------
    FormatError
        If the mesh is empty.
    """
    check_not_empty(mesh, "PLY export")
    logger.debug(
        "Generating PLY representation for mesh with %d vertices and %d faces.",
        mesh.num_vertices, mesh.num_faces,
    )
    lines = [
        "ply",
        "format ascii 1.0",
        f"comment {_COMMENT}",
        f"element vertex {mesh.num_vertices}",
        "property float x",
        "property float y",
        "property float z",
        f"element face {mesh.num_faces}",
        "property list uchar int vertex_indices",
        "end_header",
    ]
    lines.extend(_vertex_lines(mesh.vertices))
    lines.extend(f"3 {i} {j} {k}" for i, j, k in mesh.faces.tolist())
    return _join(lines)


# ---------------------------------------------------------------------------
# OBJ writer
# ---------------------------------------------------------------------------

def to_obj(mesh):
    """Serialise a mesh as Wavefront OBJ.

    Face indices are written 1-based, as OBJ requires.

    Raises
    ------
    FormatError
        If the mesh is empty.
    """
    check_not_empty(mesh, "OBJ export")
    logger.debug(
        "Generating OBJ representation for mesh with %d vertices and %d faces.",
        mesh.num_vertices, mesh.num_faces,
    )
    lines = [f"# {_COMMENT}"]
    lines.extend(_vertex_lines(mesh.vertices, prefix="v "))
    lines.extend(f"f {i} {j} {k}" for i, j, k in (mesh.faces + 1).tolist())
    return _join(lines)


# ---------------------------------------------------------------------------
# STL writer
# ---------------------------------------------------------------------------

def face_normals(mesh):
    """Return the unit normal of every face.

    The normal is the normalised cross product ``(v1 - v0) x (v2 - v1)``.
    Degenerate faces (zero-length cross product) get the zero vector.

    Parameters
    ----------
    mesh : Mesh

    Returns
    -------
    numpy.ndarray, shape (M, 3), dtype float32
    """
    tri = mesh.vertices[mesh.faces]
    cross = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 1]).astype(np.float32)
    length = np.sqrt(np.sum(cross.astype(np.float64) ** 2, axis=1)).astype(np.float32)
    degenerate = length == 0
    if np.any(degenerate):
        logger.debug(
            "%d degenerate faces get a zero normal, first is face %d.",
            int(degenerate.sum()), int(np.flatnonzero(degenerate)[0]),
        )
    normals = np.zeros_like(cross)
    ok = ~degenerate
    normals[ok] = cross[ok] / length[ok, None]
    # signed zeros from the cross product would print as -0.000000
    normals[normals == 0] = 0.0
    return normals


def to_stl(mesh):
    """Serialise a mesh as ASCII STL.

    Every face becomes a ``facet`` with its normal (see
    :func:`face_normals`) and its three vertices in winding order.

    Raises
    ------
    FormatError
        If the mesh is empty.
    """
    check_not_empty(mesh, "STL export")
    logger.debug(
        "Generating STL representation for mesh with %d vertices and %d faces.",
        mesh.num_vertices, mesh.num_faces,
    )
    normals = face_normals(mesh).tolist()
    tri = mesh.vertices[mesh.faces].tolist()
    lines = [f"solid {_COMMENT}"]
    for (nx, ny, nz), corners in zip(normals, tri):
        lines.append(f"facet normal {nx:f} {ny:f} {nz:f}")
        lines.append("outer loop")
        lines.extend(f"vertex {x:f} {y:f} {z:f}" for x, y, z in corners)
        lines.append("endloop")
        lines.append("endfacet")
    lines.append(f"endsolid {_COMMENT}")
    return _join(lines)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------

_WRITERS = {
    ExportFormat.PLY: to_ply,
    ExportFormat.OBJ: to_obj,
    ExportFormat.STL: to_stl,
}

_SUPPORTED = ", ".join(repr(f.value) for f in _WRITERS)


def _export_format(fmt):
    if isinstance(fmt, ExportFormat):
        return fmt
    try:
        return ExportFormat(str(fmt).lower())
    except ValueError as exc:
        raise FormatError(
            f"Invalid mesh export format {fmt!r}, use one of {_SUPPORTED}."
        ) from exc


def mesh_to_string(mesh, fmt):
    """Serialise a mesh in the format named by *fmt*.

    Parameters
    ----------
    mesh : Mesh
        Mesh with at least one vertex and one face.
    fmt : str or ExportFormat
        ``"ply"``, ``"obj"`` or ``"stl"`` (case-insensitive).

    Returns
    -------
    str

    Raises
    ------
    FormatError
        If *fmt* is not recognised or the mesh is empty.
    """
    return _WRITERS[_export_format(fmt)](mesh)


def export_mesh(mesh, path, fmt):
    """Write a mesh to a text file in PLY, OBJ or STL format.

    Parameters
    ----------
    mesh : Mesh
        Mesh to export.
    path : str or os.PathLike
        Output file; overwritten if it exists.
    fmt : str or ExportFormat
        ``"ply"``, ``"obj"`` or ``"stl"`` (case-insensitive).

    Returns
    -------
    str
        The text that was written.

    Raises
    ------
    FormatError
        If *fmt* is not recognised or the mesh is empty.
    OSError
        If the file cannot be written.
    """
    text = mesh_to_string(mesh, fmt)
    with open(path, "w", encoding="utf-8", newline="\n") as fh:
        fh.write(text)
    logger.info("Wrote %d characters of %s to %r.", len(text), _export_format(fmt).name, str(path))
    return text
