"""Tests for parameter/waveform readers and the snapshot writer (eddy/io.py).

Run: python -m pytest tests/test_io.py -v
"""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from eddy import ParameterFileError, SnapshotWriteError, WaveformFileError, make_model
from eddy.io import read_parameters, read_waveform, write_snapshot


# =====================================================================
# Parameter files
# =====================================================================

class TestReadParameters:

    def test_pairs(self, tmp_path):
        path = tmp_path / 'params.txt'
        path.write_text("0.2 0.5\n0.05\t0.01\n")
        assert read_parameters(str(path)) == make_model([0.2, 0.05], [0.5, 0.01])

    def test_stops_at_non_numeric(self, tmp_path):
        path = tmp_path / 'params.txt'
        path.write_text("0.1 0.3\n# comment 1 2\n0.4 0.5\n")
        model = read_parameters(str(path))
        assert len(model) == 1

    def test_unpaired_value_ignored(self, tmp_path):
        path = tmp_path / 'params.txt'
        path.write_text("0.1 0.3\n0.2\n")
        assert read_parameters(str(path)) == make_model([0.1], [0.3])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ParameterFileError) as excinfo:
            read_parameters(str(tmp_path / 'nope.txt'))
        assert isinstance(excinfo.value, OSError)
        assert 'Failed to open file' in str(excinfo.value)

    def test_no_pairs(self, tmp_path):
        path = tmp_path / 'params.txt'
        path.write_text("\n\n")
        with pytest.raises(ParameterFileError, match='No valid parameters'):
            read_parameters(str(path))


# =====================================================================
# Waveform files
# =====================================================================

class TestReadWaveform:

    def test_values(self, tmp_path):
        path = tmp_path / 'grad.txt'
        path.write_text("0\n1.5\n-2e-3\n")
        np.testing.assert_array_equal(read_waveform(str(path)), [0.0, 1.5, -0.002])

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'grad.txt'
        path.write_text("")
        assert len(read_waveform(str(path))) == 0

    def test_missing_file(self, tmp_path):
        with pytest.raises(WaveformFileError):
            read_waveform(str(tmp_path / 'nope.txt'))


# =====================================================================
# Snapshots
# =====================================================================

class TestWriteSnapshot:

    def test_format(self, tmp_path):
        path = tmp_path / 'out.txt'
        write_snapshot(str(path), [1.0, -0.123456789, 2])
        assert path.read_text() == "1.0000000\n-0.123456789\n2.0000000\n"

    def test_overwrites(self, tmp_path):
        path = tmp_path / 'out.txt'
        write_snapshot(str(path), [1.0, 2.0, 3.0])
        write_snapshot(str(path), [4.0])
        assert path.read_text() == "4.0000000\n"

    def test_unwritable(self, tmp_path):
        with pytest.raises(SnapshotWriteError):
            write_snapshot(str(tmp_path / 'missing_dir' / 'out.txt'), [1.0])

    def test_full_precision_kept(self, tmp_path):
        values = [1 / 3, 1e-9, 0.1 + 0.2]
        path = tmp_path / 'out.txt'
        write_snapshot(str(path), values)
        lines = path.read_text().splitlines()
        assert lines[0] == '0.3333333333333333'
        assert lines[1] == '0.000000001'
        assert [float(v) for v in lines] == values
