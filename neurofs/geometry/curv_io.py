"""Reader and writer for FreeSurfer curv (morphometry) files.

Curv files hold one float per surface vertex, e.g. ``lh.curv``,
``lh.thickness`` or ``lh.sulc``.  Layout, all numbers big-endian:

======================  ====================================
field                   encoding
======================  ====================================
magic                   3 bytes ``FF FF FF``
n_vertices              int32
n_faces                 int32, informational (0 on write)
n_values_per_vertex     int32, must be 1
values                  n_vertices x float32
======================  ====================================

The number of values is not checked against any mesh here; use
:func:`neurofs.geometry.inputs.resolve_overlay` for that.
"""

import logging

import numpy as np

from ..errors import FormatError
from .byte_cursor import ByteCursor, read_file_bytes

logger = logging.getLogger(__name__)

CURV_MAGIC = b"\xff\xff\xff"

_HEADER_DTYPE = np.dtype([
    ("magic", "u1", (3,)),
    ("n_vertices", ">i4"),
    ("n_faces", ">i4"),
    ("n_values_per_vertex", ">i4"),
])


def read_morph_data(path, *, log=None):
    """Read a FreeSurfer curv file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the curv file, e.g. ``<subject>/surf/lh.thickness``.
    log : logging.Logger, optional
        Logger for header output; defaults to this module's logger.

    Returns
    -------
    numpy.ndarray, shape (n_vertices,), dtype float32

    Raises
    ------
    FormatError
        If the magic bytes are not ``FF FF FF``, more than one value per
        vertex is declared, or the file is truncated.
    OSError
        If the file cannot be read.
    """
    log = log or logger
    path = str(path)
    cursor = ByteCursor(read_file_bytes(path), path=path)

    magic = cursor.read_bytes(3, "curv magic bytes")
    if magic != CURV_MAGIC:
        raise FormatError(
            f"Curv magic bytes are {list(magic)}, expected [255, 255, 255]: "
            f"{path!r} is not a FreeSurfer curv file.  Provide a recon-all "
            f"output file like '<subject>/surf/lh.thickness'.",
            path=path,
        )

    n_verts, n_faces, n_per_vertex = cursor.read("3i", "curv header")
    log.info(
        "Curv %r: %d vertices, %d faces, %d values per vertex.",
        path, n_verts, n_faces, n_per_vertex,
    )
    if n_per_vertex != 1:
        raise FormatError(
            f"Curv file {path!r} declares {n_per_vertex} values per vertex; "
            f"only 1 is supported.",
            path=path,
        )
    if n_verts < 0:
        raise FormatError(
            f"Curv file {path!r} declares a negative vertex count {n_verts}.",
            path=path,
        )
    return cursor.read_array(np.float32, n_verts, "per-vertex values")


def write_morph_data(path, values, *, log=None):
    """Write per-vertex values as a FreeSurfer curv file.

    The header is written with ``n_faces = 0`` and one value per vertex, so
    :func:`read_morph_data` returns exactly the float32 values written.

    Parameters
    ----------
    path : str or os.PathLike
        Output file; its directory must exist.
    values : array-like, shape (n_vertices,)
        Per-vertex values; converted to float32.
    log : logging.Logger, optional
        Logger for header output; defaults to this module's logger.

    Raises
    ------
    ValueError
        If *values* is empty or not 1-D.
    OSError
        If the file cannot be written.
    """
    log = log or logger
    values = np.asarray(values, dtype=np.float32)
    if values.ndim != 1:
        raise ValueError(
            f"Curv values must be a 1-D per-vertex array, got shape {values.shape}."
        )
    if values.size == 0:
        raise ValueError("Refusing to write an empty curv file.")

    header = np.zeros(1, dtype=_HEADER_DTYPE)
    header["magic"] = np.frombuffer(CURV_MAGIC, dtype="u1")
    header["n_vertices"] = values.size
    header["n_faces"] = 0
    header["n_values_per_vertex"] = 1
    log.info("Writing curv %r: %d vertices, 0 faces, 1 value per vertex.", str(path), values.size)

    payload = values.astype(">f4").tobytes()
    with open(path, "wb") as fh:
        fh.write(header.tobytes())
        fh.write(payload)
    log.debug("Wrote %d bytes to %r.", _HEADER_DTYPE.itemsize + len(payload), str(path))
