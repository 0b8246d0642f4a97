# coding:utf-8
"""
This module defines the Converter class, which drives the conversion from
decoded MIDI tracks to MML text.
"""
"""
このモジュールには、デコードされたMIDIトラックからMMLテキストへの変換を
統括する Converter クラスが定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

import numbers
from typing import List
from midi2mml.smf import SMFData, UnsupportedTiming, readsmf
from midi2mml.event import TempoEvent, message_to_event
from midi2mml.tempo import TempoLedger
from midi2mml.track import Track
from midi2mml.mml import tracks_to_mml

__all__ = ['Converter', 'convert_file']


class Converter(object):
    """
    Converts the tracks of a standard MIDI file into MML.

    The conversion is a single fatal-or-complete operation: each pass of
    :class:`.Track` is applied to all the tracks before the next pass
    starts, because every track may disable tempo points in the shared
    ledger and all tracks must see the same decisions.

    Args:
        smf(SMFData): decoded MIDI file

    Raises:
        UnsupportedTiming: The resolution is not a positive number of ticks
            per quarter note.
    """
    """
    標準MIDIファイルのトラックをMMLへ変換します。

    変換は致命的エラーで中断するか完了するかのどちらかです。各トラックは
    共有されたテンポ台帳中のテンポ点を無効化する可能性があり、すべての
    トラックが同じ判断を見なければならないため、:class:`.Track` の各パスは
    すべてのトラックに適用されてから次のパスが始まります。

    Args:
        smf(SMFData): デコードされたMIDIファイル
    """
    def __init__(self, smf):
        if not isinstance(smf.ticks_per_beat, numbers.Integral) or \
           smf.ticks_per_beat <= 0:
            raise UnsupportedTiming("MIDI files with timecode are not "
                                    "supported.")
        self.smf = smf
        self.ticks_per_beat = smf.ticks_per_beat
        self.tracks = []  # type: List[Track]
        self.ledger = TempoLedger()

    @classmethod
    def from_tracks(cls, tracks, ticks_per_beat) -> 'Converter':
        """ Creates a converter from a list of tracks, each being a list
        of (delta_ticks, channel, message) tuples. """
        return cls(SMFData(ticks_per_beat, tracks))

    def build_tracks(self) -> None:
        """ Converts the decoded messages into events and collects the
        tempo changes of all the tracks into the tempo ledger. """
        self.tracks = []
        self.ledger = TempoLedger()
        for track_index, track_data in enumerate(self.smf.tracks):
            track = Track(track_index)
            ticks = 0
            for delta_ticks, ch, msg in track_data:
                ticks += delta_ticks
                ev = message_to_event(msg, ticks, ch)
                if isinstance(ev, TempoEvent):
                    self.ledger.add(ev.t, ev.value)
                elif ev is not None:
                    track.push_event(ev)
            self.tracks.append(track)
        self.ledger.dedup()

    def reconcile(self) -> None:
        """ Applies the three passes to all the tracks. """
        for track in self.tracks:
            track.assign_lanes(self.ledger)
        for track in self.tracks:
            track.quantize(self.ticks_per_beat, self.ledger)
        for track in self.tracks:
            track.verify(self.ledger)

    def convert(self) -> str:
        """
        Performs the whole conversion.

        Returns:
            MML text

        Raises:
            ConversionError: The conversion failed.
        """
        self.build_tracks()
        self.reconcile()
        return tracks_to_mml(self.tracks, self.ticks_per_beat)


def convert_file(filename) -> str:
    """
    Reads a standard MIDI file and returns it converted to MML text.

    Args:
        filename(str): file name ('-' for standard input)
    """
    """
    標準MIDIファイルを読み、MMLテキストへ変換したものを返します。

    Args:
        filename(str): ファイル名 ('-' なら標準入力)
    """
    return Converter(readsmf(filename)).convert()
