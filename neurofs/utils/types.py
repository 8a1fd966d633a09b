"""Contains the enumeration types used in neurofs.

Classes
-------
MriDataType
    Voxel data type codes stored in the MGH header.
Compression
    How an MGH/MGZ file should be read with respect to gzip compression.
ExportFormat
    ASCII mesh interchange formats produced by the exporters.
"""

import enum

import numpy as np


class MriDataType(enum.IntEnum):
    """Voxel data type code of an MGH volume.

    The integer value is the code stored in the header; the FreeSurfer name
    (e.g. ``"MRI_UCHAR"``) is available as :attr:`type_name` and the numpy
    dtype of the stored values (big-endian) as :attr:`dtype`.

    Attributes
    ----------
    UCHAR : int
        Unsigned 8 bit integer, code 0.
    INT : int
        Signed 32 bit integer, code 1.
    FLOAT : int
        32 bit float, code 3.
    SHORT : int
        Signed 16 bit integer, code 4.
    """
    UCHAR = 0
    INT = 1
    FLOAT = 3
    SHORT = 4

    @property
    def type_name(self):
        """FreeSurfer name of the data type, e.g. ``"MRI_FLOAT"``."""
        return f"MRI_{self.name}"

    @property
    def dtype(self):
        """Big-endian numpy dtype of values of this type on disk."""
        return np.dtype(_MRI_DTYPES[self])

    @classmethod
    def from_name(cls, name):
        """Return the member for a FreeSurfer type name like ``"MRI_INT"``.

        Raises
        ------
        ValueError
            If *name* is not one of the four supported type names.
        """
        for member in cls:
            if member.type_name == name:
                return member
        raise ValueError(
            f"Invalid or unsupported MGH data type name {name!r}.  Supported are "
            f"{', '.join(repr(m.type_name) for m in cls)}."
        )


_MRI_DTYPES = {
    MriDataType.UCHAR: ">u1",
    MriDataType.INT:   ">i4",
    MriDataType.FLOAT: ">f4",
    MriDataType.SHORT: ">i2",
}


class Compression(enum.Enum):
    """Gzip handling mode for MGH/MGZ files.

    Attributes
    ----------
    YES : str
        Always gunzip the file before parsing.
    NO : str
        Never gunzip; the file is raw MGH.
    AUTO : str
        Gunzip if the file name ends in ``.mgz`` or ``.gz``.
    """
    YES = "yes"
    NO = "no"
    AUTO = "auto"

    @classmethod
    def from_mode(cls, mode):
        """Convert a user supplied mode to a member.

        Accepts a member, or one of the strings ``"yes"``/``"mgz"``,
        ``"no"``/``"mgh"`` and ``"auto"`` (case-insensitive).

        Raises
        ------
        ValueError
            If *mode* is not recognised.
        """
        if isinstance(mode, cls):
            return mode
        key = str(mode).lower()
        if key not in _COMPRESSION_ALIASES:
            raise ValueError(
                f"is_gzipped must be one of 'yes', 'mgz', 'no', 'mgh' or 'auto', "
                f"got {mode!r}."
            )
        return _COMPRESSION_ALIASES[key]

    def is_gzipped(self, path):
        """Return True if *path* should be gunzipped under this mode."""
        if self is Compression.YES:
            return True
        if self is Compression.NO:
            return False
        return str(path).lower().endswith((".mgz", ".gz"))


_COMPRESSION_ALIASES = {
    "yes":  Compression.YES,
    "mgz":  Compression.YES,
    "no":   Compression.NO,
    "mgh":  Compression.NO,
    "auto": Compression.AUTO,
}


class ExportFormat(enum.Enum):
    """ASCII mesh interchange formats.

    Attributes
    ----------
    PLY : str
        Stanford PLY, ASCII encoding.
    OBJ : str
        Wavefront OBJ.
    STL : str
        ASCII StereoLithography.
    """
    PLY = "ply"
    OBJ = "obj"
    STL = "stl"
