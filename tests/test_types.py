"""Tests for neurofs/utils/types.py and neurofs/errors.py."""

import numpy as np
import pytest

from neurofs.errors import FormatError, UnsupportedTypeError
from neurofs.utils.types import Compression, ExportFormat, MriDataType


class TestMriDataType:
    @pytest.mark.parametrize("code, name, dtype", [
        (0, "MRI_UCHAR", np.uint8),
        (1, "MRI_INT", np.int32),
        (3, "MRI_FLOAT", np.float32),
        (4, "MRI_SHORT", np.int16),
    ])
    def test_mapping(self, code, name, dtype):
        member = MriDataType(code)
        assert member.type_name == name
        assert MriDataType.from_name(name) is member
        assert member.dtype.byteorder in (">", "|")
        assert member.dtype.newbyteorder("=") == np.dtype(dtype)

    def test_unknown_code(self):
        with pytest.raises(ValueError):
            MriDataType(2)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="MRI_LONG"):
            MriDataType.from_name("MRI_LONG")


class TestCompression:
    @pytest.mark.parametrize("mode, member", [
        ("yes", Compression.YES),
        ("mgz", Compression.YES),
        ("no", Compression.NO),
        ("mgh", Compression.NO),
        ("auto", Compression.AUTO),
        ("AUTO", Compression.AUTO),
        (Compression.NO, Compression.NO),
    ])
    def test_from_mode(self, mode, member):
        assert Compression.from_mode(mode) is member

    def test_invalid_mode(self):
        with pytest.raises(ValueError, match="got 'zip'"):
            Compression.from_mode("zip")

    @pytest.mark.parametrize("path, expected", [
        ("brain.mgz", True),
        ("BRAIN.MGZ", True),
        ("brain.mgh.gz", True),
        ("brain.mgh", False),
        ("brain", False),
    ])
    def test_auto(self, path, expected):
        assert Compression.AUTO.is_gzipped(path) is expected

    def test_forced(self):
        assert Compression.YES.is_gzipped("brain.mgh")
        assert not Compression.NO.is_gzipped("brain.mgz")


class TestExportFormat:
    def test_values(self):
        assert [f.value for f in ExportFormat] == ["ply", "obj", "stl"]


class TestErrors:
    def test_format_error_is_value_error(self):
        err = FormatError("bad", path="x")
        assert isinstance(err, ValueError)
        assert err.path == "x"
        assert str(err) == "bad"

    def test_unsupported_type_error(self):
        err = UnsupportedTypeError(7, path="vol.mgh")
        assert isinstance(err, FormatError)
        assert err.type_code == 7
        assert err.path == "vol.mgh"
        assert "7" in str(err) and "vol.mgh" in str(err)
