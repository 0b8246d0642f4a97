# coding:utf-8
"""
This module defines constants for MIDI messages and MML note lengths.
"""
"""
このモジュールには、MIDIメッセージおよびMMLの音長に関する定数が
定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

from fractions import Fraction

# MIDI status (upper nibble of the status byte)
S_NOTEOFF = 0x80
S_NOTEON = 0x90
S_KPR = 0xa0
S_CTRL = 0xb0
S_PROG = 0xc0
S_CPR = 0xd0
S_BEND = 0xe0
S_SYSEX = 0xf0
S_META = 0xff

M_TEMPO = 0x51

MAX_VELOCITY = 127
MAX_VOLUME = 100

MAX_LANES = 255
"""
Upper limit on the number of simultaneously sounding notes (lanes) in
a MIDI channel.
"""
"""
1つのMIDIチャネル内で同時に発音できるノート数(レーン数)の上限です。
"""

NOTE_LENGTH_UNITS = (
    (Fraction(4), '1', False),
    (Fraction(2), '2', False),
    (Fraction(1), '4', False),
    (Fraction(1, 3), '12', True),
    (Fraction(1, 2), '8', False),
    (Fraction(1, 6), '24', True),
    (Fraction(1, 4), '16', False),
    (Fraction(1, 12), '48', True),
    (Fraction(1, 8), '32', False),
    (Fraction(1, 24), '96', True),
    (Fraction(1, 16), '64', False),
    (Fraction(1, 48), '192', True),
    (Fraction(1, 32), '128', False),
)
"""
Canonical note-length units tried by the greedy duration decomposition,
in priority order. Each entry is (length in beats, MML length string,
whether the unit is a triplet). Triplet units only match durations that
are multiples of their length.
"""
"""
音長の貪欲分解で試される標準音長単位の表で、優先順に並んでいます。
各要素は (拍単位の長さ, MMLの音長文字列, 3連符単位かどうか) です。
3連符単位は、その長さの倍数である音長にのみ適合します。
"""

DEFAULT_VOLUME = 75
DEFAULT_OCTAVE = 4
BEATS_PER_LINE = 4

NOTE_NAMES = ('c', 'c+', 'd', 'd+', 'e', 'f', 'f+', 'g', 'g+', 'a', 'a+',
              'b')
