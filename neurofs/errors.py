"""Exception types raised by the neurofs readers and writers.

I/O problems (missing file, permission denied, ...) are not wrapped: they
propagate as the builtin :class:`OSError` family.  Everything that is wrong
with the *content* of a file is a :class:`FormatError`.
"""


class FormatError(ValueError):
    """File content does not match the expected format.

    Raised for wrong magic bytes, unsupported format versions, declared
    counts that disagree with the data, unparsable numeric fields, truncated
    buffers, and for meshes that are empty where geometry is required.

    Parameters
    ----------
    message : str
        Human readable description of the problem.
    path : str or None, optional
        File the problem was found in, if any.
    """

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class UnsupportedTypeError(FormatError):
    """MGH header declares a data type code that cannot be decoded.

    Parameters
    ----------
    type_code : int
        The offending data type code from the header.
    path : str or None, optional
        File the code was read from.
    """

    def __init__(self, type_code, path=None):
        super().__init__(
            f"Invalid or unsupported MGH data type code {type_code} in {path!r}.  "
            f"Supported are 0=MRI_UCHAR (uint8), 1=MRI_INT (int32), "
            f"3=MRI_FLOAT (float32), 4=MRI_SHORT (int16).",
            path=path,
        )
        self.type_code = type_code
