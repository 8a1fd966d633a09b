"""Reader for FreeSurfer MGH volumes and their gzip-compressed MGZ variant.

MGH ("Massachusetts General Hospital") files store 3D or 4D MRI scans.  The
file starts with a fixed 284-byte big-endian header:

===========================  ==============  =====
field                        encoding        bytes
===========================  ==============  =====
version                      int32, == 1     4
dim1 .. dim4                 4 x int32       16
data type code               int32           4
degrees of freedom           int32           4
RAS good flag                int16           2
voxel size x, y, z           3 x float32     12
Mdc (3x3, row-major)         9 x float32     36
Pxyz_c (center)              3 x float32     12
reserved                     194 bytes       194
===========================  ==============  =====

followed by ``dim1 * dim2 * dim3 * dim4`` big-endian values of the header's
data type (see :class:`~neurofs.utils.types.MriDataType`).  Anything after
the data (the optional MGH footer) is ignored.

The RAS fields are only meaningful when the RAS good flag is exactly 1.

MGZ files are plain gzip streams of an MGH file.  They are inflated into
memory completely before the header is parsed.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..errors import FormatError, UnsupportedTypeError
from ..utils.types import Compression, MriDataType
from .byte_cursor import ByteCursor, read_file_bytes

logger = logging.getLogger(__name__)

MGH_HEADER_SIZE = 284
MGH_VERSION = 1

# everything before the reserved block
_HEADER_FIELDS = "7i h 3f 9f 3f"


@dataclass(frozen=True, eq=False)
class MghHeader:
    """Decoded MGH header.

    Attributes
    ----------
    version : int
        Format version, always 1 for headers returned by the reader.
    dims : tuple of int
        The four dimension lengths.
    data_type : MriDataType
        Type of the stored voxel values.
    dof : int
        Degrees of freedom.
    ras_good_flag : int
        1 if the RAS fields below are valid; any other value means they
        must be ignored.
    voxel_size : numpy.ndarray, shape (3,)
        Voxel size along x, y and z in mm.
    mdc : numpy.ndarray, shape (3, 3)
        Direction cosine matrix, row-major as stored.
    pxyz_c : numpy.ndarray, shape (3,)
        RAS coordinates of the volume center.
    """
    version: int
    dims: tuple
    data_type: MriDataType
    dof: int
    ras_good_flag: int
    voxel_size: np.ndarray
    mdc: np.ndarray
    pxyz_c: np.ndarray

    @property
    def ras_good(self):
        """True if the RAS fields are valid."""
        return self.ras_good_flag == 1

    @property
    def data_type_name(self):
        """FreeSurfer name of the data type, e.g. ``"MRI_UCHAR"``."""
        return self.data_type.type_name

    @property
    def num_values(self):
        """Number of values in the data section."""
        d1, d2, d3, d4 = self.dims
        return d1 * d2 * d3 * d4

    def same_as(self, other):
        """Return True if *other* describes the same header field by field."""
        return (
            self.version == other.version
            and self.dims == other.dims
            and self.data_type == other.data_type
            and self.dof == other.dof
            and self.ras_good_flag == other.ras_good_flag
            and np.array_equal(self.voxel_size, other.voxel_size)
            and np.array_equal(self.mdc, other.mdc)
            and np.array_equal(self.pxyz_c, other.pxyz_c)
        )


@dataclass(frozen=True, eq=False)
class MghVolume:
    """MGH header plus the flat voxel data array.

    ``data`` holds ``header.num_values`` values in file order.  Its dtype
    is selected by ``header.data_type``: ``uint8``, ``int32``, ``float32``
    or ``int16``.
    """
    header: MghHeader
    data: np.ndarray

    @property
    def dims(self):
        """The four dimension lengths from the header."""
        return self.header.dims

    @property
    def data_type(self):
        """Type of the stored voxel values, from the header."""
        return self.header.data_type


def _load_buffer(path, is_gzipped):
    gzipped = Compression.from_mode(is_gzipped).is_gzipped(path)
    return ByteCursor(read_file_bytes(path, gzipped=gzipped), path=path)


def _parse_header(cursor, path, log):
    fields = cursor.read(_HEADER_FIELDS, "MGH header")
    version = fields[0]
    if version != MGH_VERSION:
        raise FormatError(
            f"MGH file {path!r} is not a valid MGH file or has unsupported file "
            f"format version {version}; only version {MGH_VERSION} is supported.",
            path=path,
        )
    dims = tuple(fields[1:5])
    type_code, dof, ras_good_flag = fields[5:8]
    try:
        data_type = MriDataType(type_code)
    except ValueError as exc:
        raise UnsupportedTypeError(type_code, path=path) from exc
    if any(d < 0 for d in dims):
        raise FormatError(f"MGH file {path!r} declares negative dimensions {dims}.", path=path)
    cursor.skip(MGH_HEADER_SIZE - cursor.tell(), "reserved MGH header bytes")

    header = MghHeader(
        version=version,
        dims=dims,
        data_type=data_type,
        dof=dof,
        ras_good_flag=ras_good_flag,
        voxel_size=np.array(fields[8:11], dtype=np.float32),
        mdc=np.array(fields[11:20], dtype=np.float32).reshape(3, 3),
        pxyz_c=np.array(fields[20:23], dtype=np.float32),
    )
    log.info("MGH %r: version=%d, dimensions: %d %d %d %d.", path, version, *dims)
    log.info(
        "MGH %r: data type=%d (%s), DoF=%d, RAS good=%d.",
        path, int(data_type), data_type.type_name, dof, ras_good_flag,
    )
    if header.ras_good:
        log.info("MGH %r: voxel size x y z: %s.", path, header.voxel_size)
        log.info("MGH %r: Mdc:\n%s", path, header.mdc)
        log.info("MGH %r: Pxyz_c: %s.", path, header.pxyz_c)
    return header


def _read_values(cursor, header, path):
    try:
        return cursor.read_array(
            header.data_type.dtype, header.num_values, f"{header.data_type_name} data"
        )
    except FormatError as exc:
        raise FormatError(
            f"Failed to read {header.num_values} values of {header.data_type_name} "
            f"data from MGH file {path!r}: {exc}",
            path=path,
        ) from exc


def read_mgh_header(path, is_gzipped="auto", *, log=None):
    """Read and validate the header of an MGH or MGZ file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the ``.mgh`` / ``.mgz`` file.
    is_gzipped : str or Compression, optional
        ``"yes"`` / ``"mgz"`` to gunzip, ``"no"`` / ``"mgh"`` to read raw,
        ``"auto"`` (default) to gunzip files ending in ``.mgz`` or ``.gz``.
    log : logging.Logger, optional
        Logger for header output; defaults to this module's logger.

    Returns
    -------
    MghHeader

    Raises
    ------
    FormatError
        If the version is not 1 or the header is truncated.
    UnsupportedTypeError
        If the data type code is not one of 0, 1, 3, 4.
    ValueError
        If *is_gzipped* is not a known mode.
    OSError
        If the file cannot be read.
    """
    log = log or logger
    path = str(path)
    return _parse_header(_load_buffer(path, is_gzipped), path, log)


def read_mgh_data(path, header, is_gzipped="auto", *, log=None):
    """Read the data section of an MGH or MGZ file.

    The file is read (and inflated) again, the 284 header bytes are
    skipped, and ``header.num_values`` values of ``header.data_type`` are
    decoded.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the ``.mgh`` / ``.mgz`` file.
    header : MghHeader
        Header of the same file, from :func:`read_mgh_header`.
    is_gzipped : str or Compression, optional
        See :func:`read_mgh_header`.
    log : logging.Logger, optional
        Logger; defaults to this module's logger.

    Returns
    -------
    numpy.ndarray, shape (num_values,)
        Flat data array in native byte order.

    Raises
    ------
    FormatError
        If the file holds fewer values than the header declares.
    """
    log = log or logger
    path = str(path)
    cursor = _load_buffer(path, is_gzipped)
    cursor.skip(MGH_HEADER_SIZE, "MGH header")
    data = _read_values(cursor, header, path)
    log.debug("MGH %r: read %d %s values.", path, data.size, header.data_type_name)
    return data


def read_mgh(path, is_gzipped="auto", *, log=None):
    """Read a complete MGH or MGZ file.

    Equivalent to :func:`read_mgh_header` followed by
    :func:`read_mgh_data`, but the file is read and inflated only once.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the ``.mgh`` / ``.mgz`` file.
    is_gzipped : str or Compression, optional
        See :func:`read_mgh_header`.
    log : logging.Logger, optional
        Logger; defaults to this module's logger.

    Returns
    -------
    MghVolume

    Raises
    ------
    FormatError, UnsupportedTypeError, ValueError, OSError
        As for :func:`read_mgh_header` and :func:`read_mgh_data`.
    """
    log = log or logger
    path = str(path)
    cursor = _load_buffer(path, is_gzipped)
    header = _parse_header(cursor, path, log)
    data = _read_values(cursor, header, path)
    log.debug("MGH %r: read %d %s values.", path, data.size, header.data_type_name)
    return MghVolume(header=header, data=data)
