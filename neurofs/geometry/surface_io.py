"""Reader for FreeSurfer binary triangle surfaces (``lh.white``, ``rh.pial``, ...).

File layout, all numbers big-endian:

=====================  =========================================
field                  encoding
=====================  =========================================
magic                  3 bytes ``FF FF FE``
created                text line terminated by ``\\n``
comment                text line terminated by ``\\n``
n_vertices, n_faces    2 x int32
vertex coordinates     n_vertices x 3 float32
faces                  n_faces x 3 int32, 0-based vertex indices
=====================  =========================================

The magic bytes are the only self-identification of the format.  They
differ from the curv format (``FF FF FF``) only in the last byte; choosing
the right reader is up to the caller.
"""

import logging

import numpy as np

from ..errors import FormatError
from .byte_cursor import ByteCursor, read_file_bytes
from .mesh import Mesh

logger = logging.getLogger(__name__)

SURFACE_MAGIC = b"\xff\xff\xfe"

_N_PREVIEW = 5


def read_geometry(path, *, read_metadata=False, log=None):
    """Read a FreeSurfer triangle surface.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the surface file, e.g. ``<subject>/surf/lh.white``.
    read_metadata : bool, optional
        If True, also return the two text header lines.
    log : logging.Logger, optional
        Logger for header and preview output; defaults to this module's
        logger.

    Returns
    -------
    mesh : Mesh
        The surface mesh.
    metadata : dict
        Only when *read_metadata* is True: ``{"created": str,
        "comment": str}`` with the newline stripped.

    Raises
    ------
    FormatError
        If the magic bytes are not ``FF FF FE``, the counts are negative,
        the file is truncated, or a face references a missing vertex.
    OSError
        If the file cannot be read.
    """
    log = log or logger
    path = str(path)
    cursor = ByteCursor(read_file_bytes(path), path=path)

    magic = cursor.read_bytes(3, "surface magic bytes")
    if magic != SURFACE_MAGIC:
        raise FormatError(
            f"Surface magic bytes are {list(magic)}, expected [255, 255, 254]: "
            f"{path!r} is not a FreeSurfer surface file.  Provide a recon-all "
            f"output file like '<subject>/surf/lh.white'.",
            path=path,
        )
    log.info("Surface header magic bytes: %d %d %d.", *magic)

    created = cursor.read_line(what="surface 'created' line")
    comment = cursor.read_line(what="surface comment line")
    log.info("Surface %r created line: %r, comment line: %r.", path, created, comment)

    n_verts, n_faces = cursor.read("2i", "surface vertex and face counts")
    log.info("Surface %r: %d vertices, %d faces.", path, n_verts, n_faces)
    if n_verts < 0 or n_faces < 0:
        raise FormatError(
            f"Surface {path!r} declares negative counts: "
            f"{n_verts} vertices, {n_faces} faces.",
            path=path,
        )

    vertices = cursor.read_array(np.float32, n_verts * 3, "surface vertex coordinates")
    faces = cursor.read_array(np.int32, n_faces * 3, "surface faces")

    if faces.size > 0 and (int(faces.max()) >= n_verts or int(faces.min()) < 0):
        raise FormatError(
            f"Surface face indices out of range [0, {n_verts}) in {path!r}: "
            f"min={int(faces.min())}, max={int(faces.max())}.",
            path=path,
        )

    mesh = Mesh(vertices, faces)
    if log.isEnabledFor(logging.DEBUG):
        log.debug("First vertices of %r:\n%s", path, mesh.vertices[:_N_PREVIEW])
        log.debug("First faces of %r:\n%s", path, mesh.faces[:_N_PREVIEW])

    if read_metadata:
        return mesh, {"created": created, "comment": comment}
    return mesh
