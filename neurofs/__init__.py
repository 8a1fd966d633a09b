"""neurofs: read and write FreeSurfer structural neuroimaging files.

neurofs decodes the file formats written by FreeSurfer-style surface
reconstruction pipelines and offers a few geometric tools on top:

- **Surfaces**: triangle meshes such as ``lh.white`` via ``read_geometry``
- **Curv overlays**: per-vertex scalars such as ``lh.thickness`` via
  ``read_morph_data`` / ``write_morph_data``
- **Labels**: vertex subsets such as ``lh.cortex.label`` via ``read_label``
- **Volumes**: MGH and gzip-compressed MGZ scans via ``read_mgh``
- **Mesh tools**: ``mesh_stats`` and ASCII PLY / OBJ / STL export
- **CLI tools**: ``neurofs-info`` to inspect a file, ``neurofs-sys_info``

Example::

    from neurofs import read_geometry, read_morph_data, mesh_stats, export_mesh

    mesh = read_geometry('path/to/lh.white')
    thickness = read_morph_data('path/to/lh.thickness')
    print(mesh_stats(mesh).total_area)
    export_mesh(mesh, 'lh.white.ply', 'ply')

Volumes::

    from neurofs import read_mgh_header, read_mgh

    header = read_mgh_header('path/to/brain.mgz')   # header only
    volume = read_mgh('path/to/brain.mgz')          # header and data
    print(header.dims, header.data_type_name, volume.data.dtype)

Logging goes through the standard :mod:`logging` module; every reader also
accepts a ``log`` keyword to use a specific logger.
"""

from ._config import sys_info  # noqa: F401
from ._version import __version__  # noqa: F401
from .errors import FormatError, UnsupportedTypeError
from .geometry import (
    Label,
    Mesh,
    MeshStats,
    MghHeader,
    MghVolume,
    export_mesh,
    generate_cube,
    generate_sphere,
    label_to_mask,
    mesh_stats,
    mesh_to_string,
    read_geometry,
    read_label,
    read_mgh,
    read_mgh_data,
    read_mgh_header,
    read_morph_data,
    write_morph_data,
)
from .utils.types import Compression, ExportFormat, MriDataType

# Export list
__all__ = [
    "__version__",
    "sys_info",
    "FormatError",
    "UnsupportedTypeError",
    "Mesh",
    "MeshStats",
    "Label",
    "MghHeader",
    "MghVolume",
    "read_geometry",
    "read_morph_data",
    "write_morph_data",
    "read_label",
    "label_to_mask",
    "read_mgh_header",
    "read_mgh_data",
    "read_mgh",
    "mesh_stats",
    "mesh_to_string",
    "export_mesh",
    "generate_cube",
    "generate_sphere",
    "Compression",
    "ExportFormat",
    "MriDataType",
]
