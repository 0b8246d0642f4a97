import pytest
import warnings
from midi2mml import *
from midi2mml.midi2mmlcmd import main

TEMPO_120 = b'\xff\x51\x07\xa1\x20'
TEMPO_140 = b'\xff\x51\x06\x8a\x1b'


def header(track=0, ch=0, sub=0):
    return ';########## Track:%d Channel:%d Sub:%d ##########' % \
        (track, ch, sub)


def test_convert(make_smf):
    path = make_smf([[(0, TEMPO_120), (100, TEMPO_140)],
                     [(90, b'\x90\x3c\x64'), (20, b'\x80\x3c\x00')]])
    with pytest.warns(ReconcileWarning, match="Tempo changes"):
        text = convert_file(path)
    assert text == header(1) + '\nt120r32r64v79o5c96\n'
    assert 't140' not in text


def test_tempo_shared_by_tracks(make_smf):
    # the tempo change disabled by the second note track must also
    # disappear from the first one
    path = make_smf([[(0, TEMPO_120), (100, TEMPO_140)],
                     [(0, b'\x90\x3e\x64'), (60, b'\x80\x3e\x00')],
                     [(90, b'\x90\x3c\x64'), (20, b'\x80\x3c\x00')]])
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", ReconcileWarning)
        text = convert_file(path)
    assert text == (header(1) + '\nt120v79o5d32\n\n' +
                    header(2) + '\nt120r32r64v79o5c96\n')


def test_converter():
    converter = Converter.from_tracks(
        [[(0, None, TEMPO_120), (0, 0, b'\xc0\x10'), (0, 0, b'\x90\x3c\x7f'),
          (0, 0, b'\xb0\x07\x64'), (480, 0, b'\x90\x3c\x00'),
          (0, None, b'\xff\x2f')]], 480)
    converter.build_tracks()
    assert [(p.tick, p.bpm) for p in converter.ledger] == [(0, 120)]
    assert converter.tracks[0].events == [TimbreEvent(0, 0, 16),
                                          NoteOnEvent(0, 0, 60, 100),
                                          NoteOffEvent(480, 0, 60, 0)]
    converter.reconcile()
    assert converter.tracks[0].events[0] == TempoEvent(0, 0, 120)
    assert converter.convert() == header() + '\nt120@16v100o5c4\n'


def test_duplicated_tempo():
    converter = Converter.from_tracks(
        [[(0, None, TEMPO_120), (480, None, TEMPO_120)],
         [(0, 1, b'\x91\x48\x40'), (960, 1, b'\x81\x48\x00')]], 480)
    assert converter.convert() == header(1, 1) + '\nt120v50o6c2\n'


def test_bad_resolution():
    with pytest.raises(UnsupportedTiming):
        Converter(SMFData(0))
    with pytest.raises(UnsupportedTiming):
        Converter(SMFData(-6360))


def test_fatal_error(make_smf):
    path = make_smf([[(0, b'\x90\x3c\x64')]])
    with pytest.raises(SoundIntegrityError):
        convert_file(path)


def test_command(make_smf, capsys):
    path = make_smf([[(0, TEMPO_120), (0, b'\x90\x3c\x7f'),
                      (480, b'\x80\x3c\x00')]], format=0)
    assert main([path]) == 0
    assert capsys.readouterr().out == header() + '\nt120v100o5c4\n'


def test_command_errors(tmp_path, make_smf, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path.joinpath('nonexistent.mid'))])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("FileNotFoundError: ")

    path = make_smf([[(0, b'\x90\x3c\x64')]], resolution=-6360)
    with pytest.raises(SystemExit) as excinfo:
        main([path])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("UnsupportedTiming: ")

    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2
