"""Geometry subpackage: FreeSurfer file codecs, mesh statistics and export.

Architecture
------------
The subpackage has three layers:

**Layer 1: low-level format codecs** (one file per format):

* :mod:`~neurofs.geometry.byte_cursor`: whole-file loading (with optional
  gzip inflation) and the big-endian :class:`ByteCursor` every binary codec
  parses with.
* :mod:`~neurofs.geometry.surface_io`: FreeSurfer triangle surfaces
  (``read_geometry``).
* :mod:`~neurofs.geometry.curv_io`: per-vertex curv overlays
  (``read_morph_data``, ``write_morph_data``).
* :mod:`~neurofs.geometry.label_io`: text labels (``read_label``,
  ``label_to_mask``).
* :mod:`~neurofs.geometry.mgh_io`: MGH / MGZ volumes
  (``read_mgh_header``, ``read_mgh_data``, ``read_mgh``).

**Layer 2: mesh geometry**:

* :mod:`~neurofs.geometry.mesh`: the :class:`Mesh` container and
  ``mesh_stats``.
* :mod:`~neurofs.geometry.mesh_io`: ASCII PLY / OBJ / STL writers
  (``to_ply``, ``to_obj``, ``to_stl``, ``export_mesh``).
* :mod:`~neurofs.geometry.generate`: synthetic cube and sphere meshes.

**Layer 3: resolvers** (:mod:`~neurofs.geometry.inputs`):

``resolve_mesh``, ``resolve_overlay``, ``resolve_roi`` accept a file path or
in-memory data and check overlays and labels against the mesh they belong
to.
"""
from .byte_cursor import ByteCursor, read_file_bytes
from .curv_io import read_morph_data, write_morph_data
from .generate import generate_cube, generate_sphere
from .inputs import resolve_mesh, resolve_overlay, resolve_roi
from .label_io import Label, label_to_mask, read_label
from .mesh import Mesh, MeshStats, edge_lengths, face_areas, mesh_stats
from .mesh_io import export_mesh, face_normals, mesh_to_string, to_obj, to_ply, to_stl
from .mgh_io import MghHeader, MghVolume, read_mgh, read_mgh_data, read_mgh_header
from .surface_io import read_geometry

__all__ = [
    # Layer 3: resolvers
    'resolve_mesh',
    'resolve_overlay',
    'resolve_roi',
    # Layer 2: mesh geometry
    'Mesh',
    'MeshStats',
    'mesh_stats',
    'edge_lengths',
    'face_areas',
    'face_normals',
    'to_ply',
    'to_obj',
    'to_stl',
    'mesh_to_string',
    'export_mesh',
    'generate_cube',
    'generate_sphere',
    # Layer 1: codecs
    'ByteCursor',
    'read_file_bytes',
    'read_geometry',
    'read_morph_data',
    'write_morph_data',
    'Label',
    'read_label',
    'label_to_mask',
    'MghHeader',
    'MghVolume',
    'read_mgh_header',
    'read_mgh_data',
    'read_mgh',
]
