# coding:utf-8
"""
This module defines functions for writing reconciled tracks as MML
(Music Macro Language) text.
"""
"""
このモジュールには、整理済みのトラックを MML (Music Macro Language) の
テキストとして書き出すための関数が定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

import warnings
import itertools
from typing import List, Tuple
from midi2mml.event import Event
from midi2mml.duration import rest_tokens, note_tokens
from midi2mml.constants import DEFAULT_VOLUME, DEFAULT_OCTAVE, \
     BEATS_PER_LINE, NOTE_NAMES
from midi2mml.track import ReconcileWarning

__all__ = ['track_to_mml', 'tracks_to_mml', 'MMLConfig', 'MMLWriter']


class MMLConfig(object):
    default_volume: int = DEFAULT_VOLUME
    default_octave: int = DEFAULT_OCTAVE
    beats_per_line: int = BEATS_PER_LINE
    note_names: Tuple[str, ...] = NOTE_NAMES
    header_format: str = \
        ';########## Track:%(track)d Channel:%(ch)d Sub:%(sub)d ##########'

    @staticmethod
    def show_config():
        print("default_volume=%r" % MMLConfig.default_volume)
        print("default_octave=%r" % MMLConfig.default_octave)
        print("beats_per_line=%r" % MMLConfig.beats_per_line)
        print("note_names=%r" % (MMLConfig.note_names,))
        print("header_format=%r" % MMLConfig.header_format)


class MMLStatus(object):
    # 見やすさのために、一定の拍数ごとに改行する
    def __init__(self, ticks_per_beat):
        self.line_length = ticks_per_beat * MMLConfig.beats_per_line
        self.line_ticks = 0
        self.lines = []  # type: List[str]
        self.cur = ''

    def put(self, text) -> None:
        self.cur += text

    def add_line_ticks(self, ticks) -> None:
        self.line_ticks += ticks
        while self.line_ticks >= self.line_length:
            self.line_ticks -= self.line_length
            self.lines.append(self.cur)
            self.cur = ''

    def getlines(self) -> List[str]:
        return self.lines + ([self.cur] if self.cur else [])


class MMLWriter(object):
    """
    Writes the events of one lane as MML. Volume and octave commands are
    written only when their values change.
    """
    def __init__(self, ticks_per_beat, track_index, ch, sub):
        self.ticks_per_beat = ticks_per_beat
        self.status = MMLStatus(ticks_per_beat)
        self.header = MMLConfig.header_format % \
            {'track': track_index, 'ch': ch, 'sub': sub}
        self.pre_tick = 0
        self.volume = MMLConfig.default_volume
        self.octave = MMLConfig.default_octave

    def write(self, ev) -> None:
        getattr(self, "write_" + ev.__class__.__name__)(ev)

    def getvalue(self) -> str:
        return '\n'.join([self.header] + self.status.getlines()) + '\n'

    def write_rest(self, ev) -> None:
        tokens, residue = rest_tokens(self.ticks_per_beat,
                                      ev.t - self.pre_tick)
        for length, token in tokens:
            self.status.put(token)
            self.status.add_line_ticks(length)
        self.check_residue(ev, residue)
        self.pre_tick = ev.t

    def write_NoteOnEvent(self, ev) -> None:
        self.write_rest(ev)
        if self.volume != ev.v:
            self.volume = ev.v
            self.status.put('v%d' % self.volume)
        if self.octave != ev.n // 12:
            self.octave = ev.n // 12
            self.status.put('o%d' % self.octave)

    def write_NoteOffEvent(self, ev) -> None:
        text, length, residue = note_tokens(
            self.ticks_per_beat, ev.t - self.pre_tick,
            MMLConfig.note_names[ev.n % 12])
        self.status.put(text)
        self.status.add_line_ticks(length)
        self.check_residue(ev, residue)
        self.pre_tick = ev.t

    def write_TempoEvent(self, ev) -> None:
        self.write_rest(ev)
        self.status.put('t%d' % ev.value)

    def write_TimbreEvent(self, ev) -> None:
        self.status.put('@%d' % ev.value)

    def check_residue(self, ev, residue) -> None:
        if residue:
            warnings.warn("Tick:%d Channel:%d Sub:%d %d tick(s) cannot be "
                          "written in MML and are dropped." %
                          (ev.t, ev.ch, ev.sub, residue),
                          ReconcileWarning, stacklevel=3)


def track_to_mml(track, ticks_per_beat) -> str:
    """
    Converts a track that has gone through all the passes of
    :class:`.Track` into MML text. Each (channel, lane) becomes a block
    beginning with a comment line; blocks are separated by a blank line.

    Args:
        track(Track): reconciled track
        ticks_per_beat(int): resolution (ticks per quarter note)

    Returns:
        MML text ('' if the track has no events)
    """
    """
    :class:`.Track` のすべてのパスを経たトラックをMMLテキストへ変換します。
    各 (チャネル, レーン) はコメント行で始まるブロックとなり、ブロック間は
    空行で区切られます。

    Args:
        track(Track): 整理済みのトラック
        ticks_per_beat(int): 分解能 (4分音符あたりのティック数)

    Returns:
        MMLテキスト (トラックにイベントがなければ '')
    """
    blocks = []
    for (ch, sub), group in itertools.groupby(track.events, key=Event.lane):
        writer = MMLWriter(ticks_per_beat, track.track_index, ch, sub)
        for ev in group:
            writer.write(ev)
        blocks.append(writer.getvalue())
    return '\n'.join(blocks)


def tracks_to_mml(tracks, ticks_per_beat) -> str:
    """ Converts a list of reconciled tracks into MML text. """
    return '\n'.join(text for text in (track_to_mml(track, ticks_per_beat)
                                       for track in tracks) if text)
