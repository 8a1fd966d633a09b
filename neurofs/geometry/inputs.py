"""Input resolver functions for neurofs.

The codecs decode one file each and do not know about each other; in
particular the length of a curv overlay or the indices of a label are never
checked against a mesh.  The resolvers here accept a file path *or*
in-memory data, load it with the matching codec and perform those
cross-checks, so callers get arrays that fit their mesh.
"""

import os

import numpy as np

from .curv_io import read_morph_data
from .label_io import Label, label_to_mask, read_label
from .mesh import Mesh
from .mgh_io import read_mgh
from .surface_io import read_geometry

_MGH_EXTS = (".mgh", ".mgz")


def resolve_mesh(mesh):
    """Resolve a mesh input to a :class:`~neurofs.geometry.mesh.Mesh`.

    Parameters
    ----------
    mesh : str, os.PathLike, Mesh, or tuple/list of two array-likes
        * path: a FreeSurfer surface file, loaded with
          :func:`~neurofs.geometry.surface_io.read_geometry`.
        * ``Mesh``: returned unchanged.
        * Two-element tuple/list: ``(vertices, faces)`` with shapes
          ``(N, 3)`` and ``(M, 3)``.

    Returns
    -------
    Mesh

    Raises
    ------
    TypeError
        If *mesh* is none of the accepted types.
    ValueError
        If the arrays do not have the expected shapes or if face indices
        are out of range.
    """
    if isinstance(mesh, Mesh):
        return mesh
    if isinstance(mesh, (str, os.PathLike)):
        return read_geometry(mesh)
    if isinstance(mesh, (tuple, list)) and len(mesh) == 2:
        vertices = np.asarray(mesh[0], dtype=np.float32)
        faces = np.asarray(mesh[1])
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise ValueError(
                f"vertices must be an array of shape (N, 3), got shape {vertices.shape}."
            )
        if faces.ndim != 2 or faces.shape[1] != 3:
            raise ValueError(
                f"faces must be an array of shape (M, 3), got shape {faces.shape}."
            )
        return Mesh(vertices, faces)
    raise TypeError(
        f"mesh must be a file path, a Mesh, or a (vertices, faces) tuple/list, "
        f"got {type(mesh).__name__!r}."
    )


def _load_overlay_from_file(path):
    """Load a 1-D per-vertex overlay array from a file path.

    ``.mgh`` / ``.mgz`` files are read with
    :func:`~neurofs.geometry.mgh_io.read_mgh` and flattened; everything else
    is treated as a curv file.
    """
    if str(path).lower().endswith(_MGH_EXTS):
        return read_mgh(path).data.ravel()
    return read_morph_data(path)


def resolve_overlay(overlay, *, n_vertices):
    """Resolve an overlay input to a 1-D float32 numpy array, or ``None``.

    Parameters
    ----------
    overlay : None, str, os.PathLike, or array-like
        * ``None``: no overlay; returns ``None``.
        * path: a curv file, or an ``.mgh`` / ``.mgz`` per-vertex volume.
        * array-like: converted to ``np.float32``.
    n_vertices : int or None
        Expected number of vertices.  Shape validation is skipped when
        ``None``.

    Returns
    -------
    numpy.ndarray of shape (n_vertices,) or None

    Raises
    ------
    ValueError
        If the loaded/converted array does not match *n_vertices*.
    """
    if overlay is None:
        return None
    if isinstance(overlay, (str, os.PathLike)):
        arr = _load_overlay_from_file(overlay).astype(np.float32)
    else:
        arr = np.asarray(overlay, dtype=np.float32)
    if n_vertices is not None and arr.shape != (n_vertices,):
        raise ValueError(
            f"overlay has shape {arr.shape} but mesh has {n_vertices} vertices."
        )
    return arr


def resolve_roi(roi, *, n_vertices):
    """Resolve a region-of-interest input to a boolean numpy array, or ``None``.

    Parameters
    ----------
    roi : None, str, os.PathLike, Label, or array-like
        * ``None``: no mask; returns ``None``.
        * path: a FreeSurfer label file; listed vertices become ``True``.
        * ``Label``: converted the same way.
        * array-like: converted to ``np.bool_``.
    n_vertices : int
        Number of vertices of the mesh.

    Returns
    -------
    numpy.ndarray of shape (n_vertices,) bool, or None

    Raises
    ------
    FormatError
        If a label references vertices the mesh does not have.
    ValueError
        If an array input does not have shape ``(n_vertices,)``.
    """
    if roi is None:
        return None
    if isinstance(roi, (str, os.PathLike)):
        roi = read_label(roi)
    if isinstance(roi, Label):
        return label_to_mask(roi, n_vertices)
    arr = np.asarray(roi, dtype=bool)
    if arr.shape != (n_vertices,):
        raise ValueError(
            f"roi has shape {arr.shape} but mesh has {n_vertices} vertices."
        )
    return arr
