# coding:utf-8
import math
from midi2mml.constants import MAX_VELOCITY, MAX_VOLUME

# Copyright (C) 2025  The midi2mml authors

__all__ = ['m2m_round', 'map_range', 'velocity_to_volume', 'usecs_to_bpm',
           'M2MWarning', 'ConversionError']


def m2m_round(x) -> int:
    """
    Round `x` to the nearest integer, the larger if there are two
    possibilities.

    Args:
        x(float): the original value

    Returns:
        Resulting value
    """
    """
    `x` を最も近い整数へ丸めます。2つ可能性があるときは大きい方になります。

    Args:
        x(float): 元の値

    Returns:
        結果の値
    """
    # round() of Python 3 rounds half to even
    return int(math.floor(x + .5))


def map_range(value, from_low, from_high, to_low, to_high) -> int:
    """
    Linearly maps `value` from the range [`from_low`, `from_high`] to the
    range [`to_low`, `to_high`], rounds it, and clamps the result to the
    destination range.
    """
    ratio = (value - from_low) / (from_high - from_low)
    mapped = m2m_round(ratio * (to_high - to_low) + to_low)
    return max(to_low, min(to_high, mapped))


def velocity_to_volume(vel) -> int:
    """
    Converts a MIDI note-on velocity (0-127) to an MML volume (0-100).

    Args:
        vel(int): velocity

    Returns:
        volume value
    """
    """
    MIDIのノートオン・ベロシティ (0〜127) を MML の音量 (0〜100) へ
    変換します。

    Args:
        vel(int): ベロシティ

    Returns:
        音量値
    """
    return map_range(vel, 0, MAX_VELOCITY, 0, MAX_VOLUME)


def usecs_to_bpm(usecs_per_beat) -> int:
    """ Converts the value of a set-tempo meta event (microseconds per beat)
    to an integral tempo value in beats per minute. """
    usecs_per_beat = max(usecs_per_beat, 1)
    return m2m_round(6e+7 / usecs_per_beat)


class M2MWarning(UserWarning):
    pass


class ConversionError(Exception):
    pass
