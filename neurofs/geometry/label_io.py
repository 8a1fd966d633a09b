"""Reader for FreeSurfer label files (``lh.cortex.label``, ...).

A label lists a subset of the vertices of a surface (or voxels of a
volume), one element per line, after a two-line header::

    #!ascii label  , from subject bert vox2ras=TkReg
    3
    0  -36.802  -18.013  63.405 0.0000000000
    5  -37.195  -18.211  63.289 0.0000000000
    17  -36.421  -18.629  63.461 0.0000000000

Line 1 is a free comment, line 2 the number of records, and every record
holds the element index followed by x, y, z and a per-element value.  Runs
of spaces between fields are common in real files and are tolerated.
"""

import logging
from dataclasses import dataclass

import numpy as np

from ..errors import FormatError

logger = logging.getLogger(__name__)

_N_FIELDS = 5
_FIELD_NAMES = ("element index", "x coordinate", "y coordinate", "z coordinate", "value")
_INT32_MIN, _INT32_MAX = np.iinfo(np.int32).min, np.iinfo(np.int32).max


@dataclass(frozen=True, eq=False)
class Label:
    """Subset of mesh vertices or volume voxels with per-element data.

    Parameters
    ----------
    element_index : array-like of int, shape (N,)
        0-based vertex or voxel indices.
    coord_x, coord_y, coord_z : array-like of float, shape (N,)
        Coordinates of each element (informational).
    value : array-like of float, shape (N,)
        Per-element scalar; often all zero when only membership matters.

    Raises
    ------
    ValueError
        If the five arrays are not all 1-D with the same length.
    """
    element_index: np.ndarray
    coord_x: np.ndarray
    coord_y: np.ndarray
    coord_z: np.ndarray
    value: np.ndarray

    def __post_init__(self):
        lengths = set()
        for name in ("element_index", "coord_x", "coord_y", "coord_z", "value"):
            dtype = np.int32 if name == "element_index" else np.float32
            arr = np.array(getattr(self, name), dtype=dtype)
            if arr.ndim != 1:
                raise ValueError(f"Label {name} must be 1-D, got shape {arr.shape}.")
            arr.flags.writeable = False
            object.__setattr__(self, name, arr)
            lengths.add(arr.size)
        if len(lengths) != 1:
            raise ValueError(f"Label arrays differ in length: {sorted(lengths)}.")

    @property
    def num_elements(self):
        """Number of elements (vertices or voxels) in the label."""
        return self.element_index.size

    @property
    def coords(self):
        """Element coordinates as an array of shape (N, 3)."""
        return np.column_stack((self.coord_x, self.coord_y, self.coord_z))

    def __len__(self):
        return self.num_elements


def _read_lines(path):
    with open(path, encoding="utf-8", errors="replace") as fh:
        lines = fh.read().split("\n")
    # a final newline terminates the last line, it does not start a new one
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _parse_field(col, token):
    """Parse field *col* of a record as int32 (index) or float32 (others).

    Raises ValueError for unparsable tokens and OverflowError for numbers
    that do not fit the 32 bit target type.
    """
    if col == 0:
        number = int(token)
        if not _INT32_MIN <= number <= _INT32_MAX:
            raise OverflowError(f"{token!r} does not fit in a 32 bit integer")
        return number
    number = float(token)
    with np.errstate(over="ignore"):
        value = np.float32(number)
    if np.isinf(value) and token.lstrip("+-").lower() not in ("inf", "infinity"):
        raise OverflowError(f"{token!r} does not fit in a 32 bit float")
    return value


def read_label(path, *, log=None):
    """Read a FreeSurfer label file.

    Parameters
    ----------
    path : str or os.PathLike
        Path to the label file, e.g. ``<subject>/label/lh.cortex.label``.
    log : logging.Logger, optional
        Logger for progress output; defaults to this module's logger.

    Returns
    -------
    Label

    Raises
    ------
    FormatError
        If the file has fewer than 3 lines, the record count on line 2 is
        not an integer or disagrees with the number of data lines, a record
        does not have exactly 5 fields, a field is not numeric, or a number
        does not fit its 32 bit type.
    OSError
        If the file cannot be read.
    """
    log = log or logger
    path = str(path)
    lines = _read_lines(path)
    if len(lines) <= 2:
        raise FormatError(
            f"Label file {path!r} contains {len(lines)} lines, but at least 3 are required.",
            path=path,
        )

    try:
        n_rows = int(lines[1].strip())
    except ValueError as exc:
        raise FormatError(
            f"Could not parse the number of records on line 2 of label file "
            f"{path!r}: {lines[1].strip()!r}.",
            path=path,
        ) from exc

    records = lines[2:]
    if n_rows != len(records):
        raise FormatError(
            f"Label file {path!r} declares {n_rows} records on line 2, but "
            f"contains {len(records)} data lines.",
            path=path,
        )

    element_index = np.empty(n_rows, dtype=np.int32)
    columns = np.empty((4, n_rows), dtype=np.float32)
    for idx, line in enumerate(records):
        # split() without a separator drops empty fields from repeated whitespace
        fields = line.split()
        if len(fields) != _N_FIELDS:
            raise FormatError(
                f"Record {idx} of label file {path!r} has {len(fields)} fields, "
                f"but {_N_FIELDS} are required: {line.strip()!r}.",
                path=path,
            )
        for col, token in enumerate(fields):
            try:
                value = _parse_field(col, token)
            except OverflowError as exc:
                raise FormatError(
                    f"{_FIELD_NAMES[col].capitalize()} of record {idx} in label file "
                    f"{path!r} is out of range: {exc}.",
                    path=path,
                ) from exc
            except ValueError as exc:
                kind = "an integer" if col == 0 else "a float"
                raise FormatError(
                    f"Could not parse {_FIELD_NAMES[col]} of record {idx} in label "
                    f"file {path!r} as {kind}: {token!r}.",
                    path=path,
                ) from exc
            if col == 0:
                element_index[idx] = value
            else:
                columns[col - 1, idx] = value

    log.info("Read label with %d elements from %r.", n_rows, path)
    return Label(element_index, columns[0], columns[1], columns[2], columns[3])


def label_to_mask(label, n_vertices):
    """Convert a label to a boolean per-vertex membership mask.

    Parameters
    ----------
    label : Label
        The label, e.g. from :func:`read_label`.
    n_vertices : int
        Number of vertices of the mesh the label belongs to.

    Returns
    -------
    numpy.ndarray, shape (n_vertices,), dtype bool
        True for every vertex listed in the label.

    Raises
    ------
    FormatError
        If the label references a vertex index outside ``[0, n_vertices)``,
        i.e. label and mesh do not belong together.
    """
    idx = label.element_index
    if idx.size > 0 and (int(idx.max()) >= n_vertices or int(idx.min()) < 0):
        raise FormatError(
            f"Label references vertex indices in [{int(idx.min())}, {int(idx.max())}], "
            f"but the mesh has only {n_vertices} vertices."
        )
    mask = np.zeros(n_vertices, dtype=bool)
    mask[idx] = True
    return mask
