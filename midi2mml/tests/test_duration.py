import pytest
import random
from midi2mml import *

random.seed(0)


def test_whole_note():
    assert decompose(480, 1920) == ([(1920, '1')], 0)
    assert division_remainder(480, 1920) == 0


def test_decompose():
    assert decompose(480, 0) == ([], 0)
    assert decompose(480, 600) == ([(480, '4'), (120, '16')], 0)
    assert decompose(480, 2400) == ([(1920, '1'), (480, '4')], 0)
    assert decompose(480, 90) == ([(60, '32'), (30, '64')], 0)
    # triplets are taken only when the duration is a multiple of them
    assert decompose(480, 160) == ([(160, '12')], 0)
    assert decompose(480, 320) == ([(160, '12'), (160, '12')], 0)
    assert decompose(480, 80) == ([(80, '24')], 0)
    assert decompose(480, 20) == ([(20, '96')], 0)
    assert decompose(480, 10) == ([(10, '192')], 0)
    assert decompose(480, 7) == ([], 7)
    assert decompose(480, 487) == ([(480, '4')], 7)


def test_unit_table():
    assert [lstr for _, lstr, _ in unit_table(480)] == \
        ['1', '2', '4', '12', '8', '24', '16', '48', '32', '96', '64',
         '192', '128']
    assert unit_table(480)[3] == (160, '12', True)
    # units shorter than a tick are left out
    assert [lstr for _, lstr, _ in unit_table(1)] == ['1', '2', '4']
    assert [length for length, _, _ in unit_table(100)][3] == 33


@pytest.mark.parametrize("ticks_per_beat", [1, 24, 96, 100, 480, 960])
def test_decompose_total(ticks_per_beat):
    for duration in range(0, 4 * ticks_per_beat + 200):
        units, remainder = decompose(ticks_per_beat, duration)
        assert sum(length for length, _ in units) + remainder == duration
        assert 0 <= remainder <= duration


def test_representable():
    plain = [1920, 960, 480, 240, 120, 60, 30, 15]
    for count in range(200):
        duration = sum(random.choice(plain)
                       for _ in range(random.randrange(1, 6)))
        assert division_remainder(480, duration) == 0


def test_tokens():
    assert rest_tokens(480, 600) == ([(480, 'r4'), (120, 'r16')], 0)
    assert rest_tokens(480, 0) == ([], 0)
    assert note_tokens(480, 600, 'c') == ('c4&c16', 600, 0)
    assert note_tokens(480, 1920, 'f+') == ('f+1', 1920, 0)
    assert note_tokens(480, 487, 'a') == ('a4', 480, 7)
