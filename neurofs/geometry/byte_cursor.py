"""Sequential reader over an in-memory byte buffer.

All binary FreeSurfer formats handled by neurofs are decoded the same way:
the whole file is read into memory (gunzipped first if needed) by
:func:`read_file_bytes` and then consumed front to back by a
:class:`ByteCursor`.  Fixed-layout header records are unpacked with
:mod:`struct`, bulk arrays with :func:`numpy.frombuffer`, and the
newline-terminated text fields of the surface header are scanned byte by
byte since they carry no length prefix.
"""

import gzip
import logging
import struct
import zlib

import numpy as np

from ..errors import FormatError

logger = logging.getLogger(__name__)

BIG_ENDIAN = ">"


def read_file_bytes(path, gzipped=False):
    """Read a complete file into memory.

    Parameters
    ----------
    path : str or os.PathLike
        File to read.
    gzipped : bool, optional
        If True the file is gunzipped while reading and the decompressed
        bytes are returned.

    Returns
    -------
    bytes
        The (decompressed) file content.

    Raises
    ------
    OSError
        If the file cannot be opened or read.
    FormatError
        If *gzipped* is True and the file is not a valid gzip stream.
    """
    if gzipped:
        try:
            with gzip.open(path, "rb") as fh:
                buffer = fh.read()
        except (gzip.BadGzipFile, EOFError, zlib.error) as exc:
            raise FormatError(
                f"Could not decompress {path!r} as gzip: {exc}", path=str(path)
            ) from exc
    else:
        with open(path, "rb") as fh:
            buffer = fh.read()
    logger.debug("Read %d bytes from %r (gzipped=%s).", len(buffer), str(path), gzipped)
    return buffer


class ByteCursor:
    """Forward-only cursor over an immutable byte buffer.

    Parameters
    ----------
    buffer : bytes-like
        The complete file content.
    path : str or None, optional
        File the buffer came from; only used in error messages.
    byteorder : str, optional
        :mod:`struct` byte order prefix applied to every read.  Defaults to
        big-endian, which is what every FreeSurfer binary format uses.
    """

    def __init__(self, buffer, path=None, byteorder=BIG_ENDIAN):
        # bytes are used in place, mutable buffers are copied once
        self._buffer = memoryview(buffer if isinstance(buffer, bytes) else bytes(buffer))
        self._pos = 0
        self.path = None if path is None else str(path)
        self.byteorder = byteorder

    def __len__(self):
        return len(self._buffer)

    @property
    def position(self):
        """Offset of the next unread byte."""
        return self._pos

    def tell(self):
        """Return the offset of the next unread byte."""
        return self._pos

    @property
    def remaining(self):
        """Number of bytes left to read."""
        return len(self._buffer) - self._pos

    def _require(self, nbytes, what):
        if nbytes > self.remaining:
            raise FormatError(
                f"Unexpected end of data while reading {what} at byte offset "
                f"{self._pos} of {self.path!r}: need {nbytes} bytes, "
                f"{self.remaining} left.",
                path=self.path,
            )

    def skip(self, nbytes, what="padding"):
        """Advance the cursor by *nbytes* bytes."""
        self._require(nbytes, what)
        self._pos += nbytes

    def read_bytes(self, nbytes, what="bytes"):
        """Return the next *nbytes* raw bytes."""
        self._require(nbytes, what)
        chunk = self._buffer[self._pos:self._pos + nbytes].tobytes()
        self._pos += nbytes
        return chunk

    def read(self, fmt, what="record"):
        """Unpack a fixed-layout record.

        Parameters
        ----------
        fmt : str
            :mod:`struct` format string *without* a byte order prefix, e.g.
            ``"4i"``.  The cursor's byte order is prepended.
        what : str, optional
            Name of the record for error messages.

        Returns
        -------
        tuple
            The unpacked values.

        Raises
        ------
        FormatError
            If fewer bytes remain than the record needs.
        """
        record = struct.Struct(self.byteorder + fmt)
        self._require(record.size, what)
        values = record.unpack_from(self._buffer, self._pos)
        self._pos += record.size
        return values

    def read_array(self, dtype, count, what="array"):
        """Read *count* consecutive values of a numpy *dtype*.

        The dtype's own byte order is replaced by the cursor's, and the
        returned array is a writable copy in native byte order.

        Raises
        ------
        FormatError
            If *count* is negative or fewer bytes remain than needed.
        """
        dtype = np.dtype(dtype).newbyteorder(self.byteorder)
        count = int(count)
        if count < 0:
            raise FormatError(
                f"Negative element count {count} for {what} in {self.path!r}.",
                path=self.path,
            )
        self._require(count * dtype.itemsize, f"{count} values of {what}")
        arr = np.frombuffer(self._buffer, dtype=dtype, count=count, offset=self._pos)
        self._pos += count * dtype.itemsize
        return arr.astype(dtype.newbyteorder("="))

    def read_line(self, strip_newline=True, encoding="utf-8", what="text line"):
        """Read a ``\\n``-terminated text field.

        Bytes are consumed one at a time until the newline is found.

        Parameters
        ----------
        strip_newline : bool, optional
            Drop the terminating newline from the returned string.
        encoding : str, optional
            Text encoding; undecodable bytes are replaced.

        Raises
        ------
        FormatError
            If the buffer ends before a newline is found.
        """
        start = self._pos
        pos = start
        end = len(self._buffer)
        while True:
            if pos >= end:
                raise FormatError(
                    f"Unexpected end of data while scanning {what} starting at "
                    f"byte offset {start} of {self.path!r}: no newline found.",
                    path=self.path,
                )
            byte = self._buffer[pos]
            pos += 1
            if byte == 0x0A:
                break
        self._pos = pos
        raw = self._buffer[start:pos - 1 if strip_newline else pos].tobytes()
        return raw.decode(encoding, errors="replace")
