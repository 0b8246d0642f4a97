import pytest
import io
from midi2mml import *


def test_readsmf(make_smf):
    path = make_smf([[(0, b'\xff\x51\x07\xa1\x20'),
                      (0, b'\xc2\x05'),
                      (0, b'\x92\x3c\x64'),
                      (480, b'\x3c\x00'),  # running status
                      (0, b'\xf0\x7e\x7f\x09\x01\xf7'),
                      (240, b'\x82\x40\x00')]],
                    resolution=96, format=0)
    smf = readsmf(path)
    assert smf.ticks_per_beat == 96 and smf.smf_format == 0
    assert len(smf.tracks) == 1
    assert smf.tracks[0] == [(0, None, b'\xff\x51\x07\xa1\x20'),
                             (0, 2, b'\xc2\x05'),
                             (0, 2, b'\x92\x3c\x64'),
                             (480, 2, b'\x92\x3c\x00'),
                             (0, None, b'\xf0\x7e\x7f\x09\x01\xf7'),
                             (240, 2, b'\x82\x40\x00'),
                             (0, None, b'\xff\x2f')]


def test_multiple_tracks(make_smf):
    path = make_smf([[], [(10, b'\x90\x3c\x64')], []])
    smf = readsmf(path)
    assert len(smf.tracks) == 3
    assert smf.tracks[1][0] == (10, 0, b'\x90\x3c\x64')
    assert all(track[-1] == (0, None, b'\xff\x2f') for track in smf.tracks)


def test_long_delta(make_smf):
    path = make_smf([[(0x0fffffff, b'\x90\x3c\x64')]])
    assert readsmf(path).tracks[0][0][0] == 0x0fffffff


def test_timecode(make_smf):
    # 25 frames per second, 40 ticks per frame
    path = make_smf([[(0, b'\x90\x3c\x64')]], resolution=-6360)
    with pytest.raises(UnsupportedTiming) as excinfo:
        readsmf(path)
    assert "timecode" in str(excinfo.value)
    assert "Frames per second: 25" in str(excinfo.value)
    assert isinstance(excinfo.value, ConversionError)


def test_garbage(make_smf):
    path = make_smf([[(0, b'\x90\x3c\x64')]], prefix=b'xy')
    with pytest.warns(SMFWarning):
        smf = readsmf(path)
    assert smf.tracks[0][0] == (0, 0, b'\x90\x3c\x64')


def test_bad_files(tmp_path, make_smf):
    path = tmp_path.joinpath('empty.mid')
    path.write_bytes(b'')
    with pytest.raises(SMFError):
        readsmf(str(path))

    with open(make_smf([[(0, b'\x90\x3c\x64')]]), 'rb') as f:
        data = f.read()
    path = tmp_path.joinpath('truncated.mid')
    path.write_bytes(data[:-3])
    with pytest.raises(SMFError):
        readsmf(str(path))

    path = make_smf([[(0, b'\x3c\x64')]], name='norunst.mid')
    with pytest.raises(SMFError):
        readsmf(path)

    path = make_smf([[(0, b'\x90\x3c\x64')]], resolution=0, name='res0.mid')
    with pytest.raises(SMFError):
        readsmf(path)

    with pytest.raises(FileNotFoundError):
        readsmf(str(tmp_path.joinpath('nonexistent.mid')))


def test_stdin(make_smf, monkeypatch):
    with open(make_smf([[(0, b'\x90\x3c\x64'), (480, b'\x80\x3c\x00')]]),
              'rb') as f:
        data = f.read()
    monkeypatch.setattr('sys.stdin', io.TextIOWrapper(io.BytesIO(data)))
    smf = readsmf('-')
    assert smf.ticks_per_beat == 480
    assert smf.tracks[0][:2] == [(0, 0, b'\x90\x3c\x64'),
                                 (480, 0, b'\x80\x3c\x00')]
