import pytest
from struct import pack


def to_varlen(value):
    result = bytearray((value & 0x7f,))
    while (value >> 7) > 0:
        value >>= 7
        result.insert(0, (value & 0x7f) | 0x80)
    return result


def smf_bytes(tracks, resolution=480, format=1):
    # each track is a list of (delta_ticks, message bytes)
    out = bytearray(pack(">4sLhhh", b'MThd', 6, format, len(tracks),
                         resolution))
    for track in tracks:
        data = bytearray()
        for delta, msg in track:
            msg = bytes(msg)
            data += to_varlen(delta)
            if msg[0] == 0xff:
                data += msg[0:2] + to_varlen(len(msg) - 2) + msg[2:]
            elif msg[0] == 0xf0:
                data.append(0xf0)
                data += to_varlen(len(msg) - 1) + msg[1:]
            else:
                data += msg
        data += b'\x00\xff\x2f\x00'
        out += pack(">4sL", b'MTrk', len(data)) + data
    return bytes(out)


@pytest.fixture
def make_smf(tmp_path):
    def make(tracks, resolution=480, format=1, name='test.mid', prefix=b''):
        path = tmp_path.joinpath(name)
        path.write_bytes(prefix + smf_bytes(tracks, resolution, format))
        return str(path)
    return make
