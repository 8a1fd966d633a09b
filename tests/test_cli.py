"""Tests for the neurofs-info and neurofs-sys_info command-line tools."""

import json
import sys
from io import StringIO

import numpy as np
import pytest

from neurofs import sys_info
from neurofs.cli import neurofs_info
from neurofs.cli.neurofs_info import guess_format, summarize
from neurofs.commands import sys_info as sys_info_cmd
from neurofs.geometry.curv_io import write_morph_data
from neurofs.geometry.generate import generate_cube


def _cube_surface(path):
    cube = generate_cube()
    path.write_bytes(
        b"\xff\xff\xfe" + b"created by test\n\n"
        + np.array([cube.num_vertices, cube.num_faces], dtype=">i4").tobytes()
        + cube.vertices.astype(">f4").tobytes()
        + cube.faces.astype(">i4").tobytes()
    )
    return path


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["neurofs-info", *map(str, args)])
    neurofs_info.run()


class TestGuessFormat:
    @pytest.mark.parametrize("name, fmt", [
        ("brain.mgz", "mgh"),
        ("orig.MGH", "mgh"),
        ("brain.mgh.gz", "mgh"),
        ("lh.cortex.label", "label"),
        ("lh.thickness", "curv"),
        ("rh.sulc", "curv"),
        ("lh.curv", "curv"),
        ("lh.jacobian_white", "curv"),
        ("lh.white", "surf"),
        ("rh.pial", "surf"),
    ])
    def test_by_name(self, name, fmt):
        assert guess_format(f"/subjects/bert/{name}") == fmt


class TestSummarize:
    def test_surface(self, tmp_path):
        summary, mesh = summarize(_cube_surface(tmp_path / "lh.cube"), "surf")
        assert mesh.num_faces == 12
        assert summary["stats"]["numEdges"] == 36
        assert summary["stats"]["totalArea"] == pytest.approx(24.0, abs=1e-5)

    def test_curv(self, tmp_path):
        path = tmp_path / "lh.thickness"
        write_morph_data(path, [1.0, 2.0, 3.0])
        summary, mesh = summarize(path, "curv")
        assert mesh is None
        assert summary["values"] == {"count": 3, "min": 1.0, "max": 3.0, "mean": 2.0}

    def test_unknown_format_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown format"):
            summarize(tmp_path / "x", "gifti")


class TestNeurofsInfo:
    def test_surface_text(self, tmp_path, monkeypatch, capsys):
        path = _cube_surface(tmp_path / "lh.cube")
        _run(monkeypatch, path)
        out = capsys.readouterr().out
        assert "(surf)" in out
        assert "numVertices" in out

    def test_label_json(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "lh.test.label"
        path.write_text("# c\n2\n3 0.0 0.0 0.0 0.5\n7 1.0 1.0 1.0 1.5\n")
        _run(monkeypatch, path, "--json")
        summary = json.loads(capsys.readouterr().out)
        assert summary["format"] == "label"
        assert summary["num_elements"] == 2
        assert summary["element_index"]["max"] == 7

    def test_export_from_extension(self, tmp_path, monkeypatch, capsys):
        surf = _cube_surface(tmp_path / "lh.cube")
        out = tmp_path / "cube.obj"
        _run(monkeypatch, surf, "--export", out, "--json")
        summary = json.loads(capsys.readouterr().out)
        assert summary["exported"]["format"] == "obj"
        assert len(out.read_text().splitlines()) == 21

    def test_export_explicit_format(self, tmp_path, monkeypatch, capsys):
        surf = _cube_surface(tmp_path / "lh.cube")
        out = tmp_path / "cube.txt"
        _run(monkeypatch, surf, "--export", out, "--export-format", "stl")
        capsys.readouterr()
        assert len(out.read_text().splitlines()) == 86

    def test_export_needs_surface(self, tmp_path, monkeypatch):
        path = tmp_path / "lh.thickness"
        write_morph_data(path, [1.0])
        with pytest.raises(SystemExit) as excinfo:
            _run(monkeypatch, path, "--export", tmp_path / "x.ply")
        assert excinfo.value.code == 2

    def test_export_unknown_extension(self, tmp_path, monkeypatch, capsys):
        surf = _cube_surface(tmp_path / "lh.cube")
        with pytest.raises(SystemExit):
            _run(monkeypatch, surf, "--export", tmp_path / "cube.off")
        assert "--export-format" in capsys.readouterr().err

    def test_format_error_reported(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "lh.white"
        path.write_bytes(b"\x00\x00\x00garbage")
        with pytest.raises(SystemExit) as excinfo:
            _run(monkeypatch, path)
        assert excinfo.value.code == 2
        assert "magic" in capsys.readouterr().err

    def test_missing_file_reported(self, tmp_path, monkeypatch, capsys):
        with pytest.raises(SystemExit):
            _run(monkeypatch, tmp_path / "missing.mgz")
        assert "missing.mgz" in capsys.readouterr().err

    def test_forced_format(self, tmp_path, monkeypatch, capsys):
        path = tmp_path / "values.bin"
        write_morph_data(path, [4.0, 5.0])
        _run(monkeypatch, path, "--format", "curv", "--json")
        assert json.loads(capsys.readouterr().out)["values"]["count"] == 2


class TestSysInfo:
    def test_sys_info(self):
        out = StringIO()
        sys_info(fid=out)
        value = out.getvalue()
        out.close()
        assert "Platform:" in value
        assert "Executable:" in value
        assert "neurofs:" in value
        assert "numpy:" in value

    def test_sys_info_developer(self):
        out = StringIO()
        sys_info(fid=out, developer=True)
        value = out.getvalue()
        out.close()
        assert "Dependencies info" in value

    def test_command(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["neurofs-sys_info"])
        sys_info_cmd.run()
        assert "Physical cores:" in capsys.readouterr().out
