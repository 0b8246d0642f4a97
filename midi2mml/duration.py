# coding:utf-8
"""
This module defines functions for decomposing durations in ticks into
canonical note lengths of MML.
"""
"""
このモジュールには、ティック単位の音長をMMLの標準音長へ分解するための
関数が定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

from typing import List, Tuple
from midi2mml.constants import NOTE_LENGTH_UNITS

__all__ = ['unit_table', 'decompose', 'division_remainder',
           'rest_tokens', 'note_tokens']


_unit_table_cache = {}


def unit_table(ticks_per_beat) -> List[Tuple[int, str, bool]]:
    """
    Returns the list of note-length units for the resolution
    `ticks_per_beat`, each as (length in ticks, MML length string,
    triplet flag), in priority order. Units whose length becomes 0 at this
    resolution are omitted.
    """
    try:
        return _unit_table_cache[ticks_per_beat]
    except KeyError:
        pass
    table = []
    for beats, lstr, triplet in NOTE_LENGTH_UNITS:
        length = int(ticks_per_beat * beats)  # floor
        if length > 0:
            table.append((length, lstr, triplet))
    _unit_table_cache[ticks_per_beat] = table
    return table


def decompose(ticks_per_beat, duration) -> Tuple[List[Tuple[int, str]], int]:
    """
    Decomposes `duration` into a sequence of canonical note lengths with a
    greedy algorithm. At each step, the first unit in the priority order
    that fits is taken: a normal unit fits if `duration` is not shorter
    than it, and a triplet unit fits only if `duration` is a multiple of it.
    The decomposition stops when nothing is left or no unit fits.

    Args:
        ticks_per_beat(int): resolution (ticks per quarter note)
        duration(int): duration in ticks

    Returns:
        A tuple of the list of (length in ticks, MML length string) and the
        remaining ticks that could not be expressed.

    Examples:
        >>> decompose(480, 1920)
        ([(1920, '1')], 0)
        >>> decompose(480, 600)
        ([(480, '4'), (120, '16')], 0)
    """
    """
    `duration` を貪欲法によって標準音長の列へ分解します。各段階では、
    優先順で最初に適合する単位が選ばれます。通常の単位は `duration` が
    その長さ以上であれば適合し、3連符の単位は `duration` がその長さの
    倍数であるときのみ適合します。残りがなくなるか、適合する単位が
    なくなった時点で分解を終えます。

    Args:
        ticks_per_beat(int): 分解能 (4分音符あたりのティック数)
        duration(int): ティック単位の音長

    Returns:
        (ティック単位の長さ, MMLの音長文字列) のリストと、表現できなかった
        残りのティック数とのタプル
    """
    table = unit_table(ticks_per_beat)
    result = []
    while duration > 0:
        for length, lstr, triplet in table:
            if (duration % length == 0) if triplet else (duration >= length):
                result.append((length, lstr))
                duration -= length
                break
        else:
            break
    return result, duration


def division_remainder(ticks_per_beat, duration) -> int:
    """
    Returns the part of `duration` that cannot be expressed as canonical
    note lengths. 0 means that the duration lies on the beat grid.
    """
    return decompose(ticks_per_beat, duration)[1]


def rest_tokens(ticks_per_beat, duration) -> Tuple[List[Tuple[int, str]], int]:
    """
    Returns the rest tokens for `duration` as a list of (length in ticks,
    token) together with the residue. Consecutive rests are simply
    concatenated without ties.
    """
    units, residue = decompose(ticks_per_beat, duration)
    return [(length, 'r' + lstr) for length, lstr in units], residue


def note_tokens(ticks_per_beat, duration, pitch) -> Tuple[str, int, int]:
    """
    Returns the MML text of a note of `pitch` (such as 'c+') lasting
    `duration` ticks. A duration consisting of more than one unit is
    written as tied notes such as 'c2&c8'.

    Returns:
        A tuple of the text, the number of ticks it represents, and the
        residue.
    """
    units, residue = decompose(ticks_per_beat, duration)
    text = '&'.join(pitch + lstr for _, lstr in units)
    return text, sum(length for length, _ in units), residue
