"""Tests for neurofs/geometry/mgh_io.py.

MGH files are assembled from a packed big-endian header plus data written
with numpy; MGZ variants are the same bytes written through :mod:`gzip`.
"""

import gzip
import logging
import struct

import numpy as np
import pytest

from neurofs.errors import FormatError, UnsupportedTypeError
from neurofs.geometry.mgh_io import (
    MGH_HEADER_SIZE,
    MghHeader,
    MghVolume,
    read_mgh,
    read_mgh_data,
    read_mgh_header,
)
from neurofs.utils.types import Compression, MriDataType

_MDC = (-1.0, 0.0, 0.0, 0.0, 0.0, -1.0, 0.0, 1.0, 0.0)


def _mgh_bytes(data, dims, type_code, version=1, dof=0, ras_good=1,
               voxel_size=(1.0, 1.0, 1.0), mdc=_MDC, pxyz_c=(0.5, -17.0, 18.0),
               dtype=None):
    header = struct.pack(
        ">7ih3f9f3f", version, *dims, type_code, dof, ras_good,
        *voxel_size, *mdc, *pxyz_c,
    )
    header += b"\x00" * (MGH_HEADER_SIZE - len(header))
    if dtype is None:
        dtype = MriDataType(type_code).dtype
    return header + np.asarray(data).astype(dtype).tobytes()


def _write(path, content, gzipped=False):
    if gzipped:
        with gzip.open(path, "wb") as fh:
            fh.write(content)
    else:
        path.write_bytes(content)
    return path


_DIMS = (2, 3, 2, 1)


@pytest.fixture
def float_volume(tmp_path):
    data = np.arange(12, dtype=np.float32) * 0.5 - 2.0
    return _write(tmp_path / "vol.mgh", _mgh_bytes(data, _DIMS, 3)), data


class TestReadMghHeader:
    def test_fields(self, float_volume):
        path, _ = float_volume
        header = read_mgh_header(path)
        assert isinstance(header, MghHeader)
        assert header.version == 1
        assert header.dims == (2, 3, 2, 1)
        assert header.data_type is MriDataType.FLOAT
        assert header.data_type_name == "MRI_FLOAT"
        assert header.dof == 0
        assert header.ras_good
        assert header.num_values == 12
        np.testing.assert_array_equal(header.voxel_size, [1.0, 1.0, 1.0])
        assert header.mdc.shape == (3, 3)
        np.testing.assert_array_equal(header.mdc[1], [0.0, 0.0, -1.0])
        np.testing.assert_array_equal(header.pxyz_c, [0.5, -17.0, 18.0])

    def test_ras_not_good(self, tmp_path):
        path = _write(tmp_path / "vol.mgh", _mgh_bytes(np.zeros(12), _DIMS, 0, ras_good=0))
        header = read_mgh_header(path)
        assert not header.ras_good
        assert header.ras_good_flag == 0

    def test_ras_fields_logged_only_when_good(self, tmp_path, caplog):
        good = _write(tmp_path / "good.mgh", _mgh_bytes(np.zeros(12), _DIMS, 0, ras_good=1))
        bad = _write(tmp_path / "bad.mgh", _mgh_bytes(np.zeros(12), _DIMS, 0, ras_good=0))
        with caplog.at_level(logging.INFO, logger="neurofs.geometry.mgh_io"):
            read_mgh_header(good)
            assert any("Pxyz_c" in r.getMessage() for r in caplog.records)
            caplog.clear()
            read_mgh_header(bad)
            assert not any("Pxyz_c" in r.getMessage() for r in caplog.records)

    def test_unsupported_type_raises(self, tmp_path):
        path = _write(tmp_path / "vol.mgh", _mgh_bytes(np.zeros(12), _DIMS, 2, dtype=">f4"))
        with pytest.raises(UnsupportedTypeError, match="type code 2") as excinfo:
            read_mgh_header(path)
        assert excinfo.value.type_code == 2
        assert isinstance(excinfo.value, FormatError)

    def test_wrong_version_raises(self, tmp_path):
        path = _write(tmp_path / "vol.mgh", _mgh_bytes(np.zeros(12), _DIMS, 3, version=2))
        with pytest.raises(FormatError, match="version 2"):
            read_mgh_header(path)

    def test_truncated_header_raises(self, tmp_path):
        content = _mgh_bytes(np.zeros(12), _DIMS, 3)[:200]
        path = _write(tmp_path / "vol.mgh", content)
        with pytest.raises(FormatError, match="reserved"):
            read_mgh_header(path)

    def test_invalid_mode_raises(self, float_volume):
        path, _ = float_volume
        with pytest.raises(ValueError, match="is_gzipped"):
            read_mgh_header(path, is_gzipped="maybe")

    def test_raw_file_forced_gzip_raises(self, float_volume):
        path, _ = float_volume
        with pytest.raises(FormatError, match="gzip"):
            read_mgh_header(path, is_gzipped="yes")


class TestReadMghData:
    @pytest.mark.parametrize("type_code, values", [
        (0, [0, 1, 127, 255]),
        (1, [-2147483648, -1, 0, 2147483647]),
        (3, [-1.5, 0.0, 3.25, 1e10]),
        (4, [-32768, -1, 0, 32767]),
    ])
    def test_all_types(self, tmp_path, type_code, values):
        dims = (2, 2, 1, 1)
        path = _write(tmp_path / "vol.mgh", _mgh_bytes(values, dims, type_code))
        volume = read_mgh(path)
        expected_dtype = MriDataType(type_code).dtype.newbyteorder("=")
        assert volume.data.dtype == expected_dtype
        np.testing.assert_array_equal(volume.data, np.asarray(values, dtype=expected_dtype))

    def test_separate_header_and_data(self, float_volume):
        path, data = float_volume
        header = read_mgh_header(path)
        values = read_mgh_data(path, header)
        assert values.shape == (12,)
        np.testing.assert_array_equal(values, data)

    def test_four_dimensional(self, tmp_path):
        dims = (2, 2, 2, 3)
        data = np.arange(24)
        path = _write(tmp_path / "vol.mgh", _mgh_bytes(data, dims, 1))
        volume = read_mgh(path)
        assert volume.dims == dims
        assert volume.data.size == 24
        np.testing.assert_array_equal(volume.data, data)

    def test_truncated_data_raises(self, tmp_path):
        content = _mgh_bytes(np.zeros(12), _DIMS, 3)[:-4]
        path = _write(tmp_path / "vol.mgh", content)
        with pytest.raises(FormatError, match="12 values of MRI_FLOAT"):
            read_mgh(path)
        header = read_mgh_header(path)
        with pytest.raises(FormatError, match="12 values of MRI_FLOAT"):
            read_mgh_data(path, header)

    def test_footer_ignored(self, float_volume):
        path, data = float_volume
        path.write_bytes(path.read_bytes() + struct.pack(">4f", 2.0, 90.0, 0.0, 0.0))
        np.testing.assert_array_equal(read_mgh(path).data, data)


class TestCompression:
    def test_mgz_matches_mgh(self, tmp_path):
        data = np.arange(12, dtype=np.int16) - 6
        content = _mgh_bytes(data, _DIMS, 4)
        mgh = _write(tmp_path / "vol.mgh", content)
        mgz = _write(tmp_path / "vol.mgz", content, gzipped=True)
        raw_volume = read_mgh(mgh)
        gz_volume = read_mgh(mgz)
        assert raw_volume.header.same_as(gz_volume.header)
        np.testing.assert_array_equal(raw_volume.data, gz_volume.data)
        assert raw_volume.data.dtype == gz_volume.data.dtype

    def test_auto_detects_gz_suffix(self, tmp_path):
        content = _mgh_bytes(np.ones(12), _DIMS, 0)
        path = _write(tmp_path / "vol.mgh.gz", content, gzipped=True)
        assert read_mgh(path).header.dims == _DIMS

    def test_forced_modes(self, tmp_path):
        content = _mgh_bytes(np.ones(12), _DIMS, 0)
        gz_no_suffix = _write(tmp_path / "vol.dat", content, gzipped=True)
        raw_mgz_suffix = _write(tmp_path / "raw.mgz", content)
        assert isinstance(read_mgh(gz_no_suffix, "mgz"), MghVolume)
        assert isinstance(read_mgh(gz_no_suffix, Compression.YES), MghVolume)
        assert isinstance(read_mgh(raw_mgz_suffix, "no"), MghVolume)
        assert isinstance(read_mgh(raw_mgz_suffix, "MGH"), MghVolume)


class TestNibabelCompat:
    @pytest.mark.parametrize("suffix", [".mgh", ".mgz"])
    def test_reads_nibabel_written_volume(self, tmp_path, suffix):
        nib = pytest.importorskip("nibabel")
        data = np.arange(60, dtype=np.float32).reshape(3, 4, 5) / 7.0
        affine = np.diag([2.0, 2.0, 2.0, 1.0])
        path = str(tmp_path / f"vol{suffix}")
        nib.save(nib.MGHImage(data, affine), path)

        volume = read_mgh(path)
        assert volume.dims == (3, 4, 5, 1)
        assert volume.data_type is MriDataType.FLOAT
        np.testing.assert_allclose(volume.header.voxel_size, [2.0, 2.0, 2.0])
        # MGH stores the first dimension fastest
        np.testing.assert_array_equal(volume.data, data.ravel(order="F"))


class TestMghVolume:
    def test_properties_forward_header(self, float_volume):
        path, _ = float_volume
        volume = read_mgh(path)
        assert volume.dims == volume.header.dims
        assert volume.data_type is volume.header.data_type

    @pytest.mark.parametrize("name", ["dims", "data_type"])
    def test_properties_documented(self, name):
        assert getattr(MghVolume, name).__doc__
