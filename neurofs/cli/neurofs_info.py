#!/usr/bin/env python3
"""CLI entry point for inspecting a single FreeSurfer file.

Decodes a surface, curv, label or MGH/MGZ file and prints a short summary,
or a JSON object with ``--json``.  Surfaces can additionally be exported to
ASCII PLY, OBJ or STL.

Usage::

    # Surface statistics and PLY export
    neurofs-info <subject_dir>/surf/lh.white --export lh.white.ply

    # Curv overlay; the format is guessed from the ".thickness" suffix
    neurofs-info <subject_dir>/surf/lh.thickness

    # Label, as JSON
    neurofs-info <subject_dir>/label/lh.cortex.label --json

    # Gzipped volume, with header logging
    neurofs-info <subject_dir>/mri/brain.mgz -v

The format is chosen from the file name unless ``--format`` is given; the
file content is never sniffed.  See ``neurofs-info --help`` for all options.
"""

import argparse
import json
import logging
import os

if __name__ == "__main__" and __package__ is None:
    import sys
    os.execv(sys.executable, [sys.executable, "-m", "neurofs.cli.neurofs_info"] + sys.argv[1:])

import numpy as np

from .._version import __version__
from ..errors import FormatError
from ..geometry import export_mesh, mesh_stats, read_geometry, read_label, read_mgh, read_morph_data
from ..utils.types import Compression, ExportFormat

_FORMATS = ("auto", "surf", "curv", "label", "mgh")
_CURV_SUFFIXES = (".curv", ".thickness", ".sulc", ".area", ".volume", ".jacobian_white")
_COMPRESSION_CHOICES = ("auto", "yes", "no", "mgz", "mgh")
_EXPORT_CHOICES = {f.value: f for f in ExportFormat}


def guess_format(path):
    """Return the reader name for *path* based on its file name only.

    ``.mgh`` / ``.mgz`` / ``.gz`` → ``"mgh"``, ``.label`` → ``"label"``,
    common morphometry suffixes such as ``.thickness`` → ``"curv"``,
    anything else → ``"surf"``.
    """
    lower = os.path.basename(str(path)).lower()
    if lower.endswith((".mgh", ".mgz", ".gz")):
        return "mgh"
    if lower.endswith(".label"):
        return "label"
    if lower.endswith(_CURV_SUFFIXES):
        return "curv"
    return "surf"


def _describe_values(values):
    values = np.asarray(values)
    if values.size == 0:
        return {"count": 0}
    return {
        "count": int(values.size),
        "min": float(values.min()),
        "max": float(values.max()),
        "mean": float(values.astype(np.float64).mean()),
    }


def summarize(path, fmt, compression="auto"):
    """Decode *path* with the reader named by *fmt* and summarise it.

    Parameters
    ----------
    path : str
        File to read.
    fmt : {'surf', 'curv', 'label', 'mgh'}
        Reader to use.
    compression : str, optional
        Gzip mode for MGH files, see :class:`~neurofs.utils.types.Compression`.

    Returns
    -------
    summary : dict
        JSON-serialisable description of the file.
    mesh : Mesh or None
        The decoded mesh for surfaces, else ``None``.
    """
    summary = {"file": str(path), "format": fmt}
    mesh = None
    if fmt == "surf":
        mesh = read_geometry(path)
        summary["stats"] = mesh_stats(mesh).as_dict()
    elif fmt == "curv":
        summary["values"] = _describe_values(read_morph_data(path))
    elif fmt == "label":
        label = read_label(path)
        summary["num_elements"] = label.num_elements
        summary["element_index"] = _describe_values(label.element_index)
        summary["values"] = _describe_values(label.value)
    elif fmt == "mgh":
        volume = read_mgh(path, Compression.from_mode(compression))
        hdr = volume.header
        summary["header"] = {
            "version": hdr.version,
            "dims": list(hdr.dims),
            "data_type": int(hdr.data_type),
            "data_type_name": hdr.data_type_name,
            "dof": hdr.dof,
            "ras_good_flag": hdr.ras_good_flag,
        }
        if hdr.ras_good:
            summary["header"]["voxel_size"] = hdr.voxel_size.tolist()
            summary["header"]["mdc"] = hdr.mdc.tolist()
            summary["header"]["pxyz_c"] = hdr.pxyz_c.tolist()
        summary["values"] = _describe_values(volume.data)
    else:
        raise ValueError(f"Unknown format {fmt!r}, use one of {', '.join(_FORMATS[1:])}.")
    return summary, mesh


def _print_summary(summary):
    print(f"{summary['file']} ({summary['format']})")
    for key, value in summary.items():
        if key in ("file", "format"):
            continue
        if isinstance(value, dict):
            print(f"  {key}:")
            for sub_key, sub_value in value.items():
                print(f"    {sub_key:<16} {sub_value}")
        else:
            print(f"  {key:<18} {value}")


def run():
    """Command-line entry point of ``neurofs-info``.

    Parses command-line arguments, decodes the file, prints the summary and
    performs the optional mesh export.  Read and format errors are reported
    through :meth:`argparse.ArgumentParser.error`.
    """
    parser = argparse.ArgumentParser(
        prog="neurofs-info",
        description=(
            "Print a summary of a FreeSurfer surface, curv, label or MGH/MGZ "
            "file, and optionally export surfaces to PLY, OBJ or STL."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("file", help="Path to the file to inspect.")
    parser.add_argument(
        "--format",
        default="auto",
        choices=_FORMATS,
        help="Reader to use (default: auto, chosen from the file name).",
    )
    parser.add_argument(
        "--compression",
        default="auto",
        choices=_COMPRESSION_CHOICES,
        help="Gzip handling for MGH files (default: auto, by .mgz/.gz suffix).",
    )
    parser.add_argument(
        "--export",
        metavar="PATH",
        default=None,
        help="Export a surface mesh to PATH.",
    )
    parser.add_argument(
        "--export-format",
        choices=list(_EXPORT_CHOICES),
        default=None,
        help="Export format (default: taken from the --export file extension).",
    )
    parser.add_argument("--json", action="store_true", help="Print the summary as JSON.")
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log reader details; repeat for debug output.",
    )
    args = parser.parse_args()

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    log = logging.getLogger(__name__)

    fmt = guess_format(args.file) if args.format == "auto" else args.format
    export_fmt = args.export_format
    if args.export is not None:
        if fmt != "surf":
            parser.error(f"--export needs a surface file, {args.file!r} is read as {fmt!r}.")
        if export_fmt is None:
            export_fmt = os.path.splitext(args.export)[1].lstrip(".").lower()
            if export_fmt not in _EXPORT_CHOICES:
                parser.error(
                    f"Cannot derive an export format from {args.export!r}; "
                    f"use --export-format."
                )

    try:
        summary, mesh = summarize(args.file, fmt, args.compression)
        if args.export is not None:
            export_mesh(mesh, args.export, export_fmt)
            summary["exported"] = {"path": args.export, "format": export_fmt}
            log.info("Mesh exported to %s", args.export)
    except (OSError, FormatError, ValueError) as e:
        parser.error(str(e))

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        _print_summary(summary)


if __name__ == "__main__":
    run()
