# coding:utf-8
"""
This module defines the Track class, which reconciles the events of a MIDI
track into monophonic lanes aligned to the beat grid.
"""
"""
このモジュールには、MIDIトラックのイベントを拍グリッドに揃った単音の
レーンへと整理する Track クラスが定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

import warnings
import itertools
from functools import cmp_to_key
from typing import List
from midi2mml.event import Event, NoteEventClass, NoteOnEvent, \
     NoteOffEvent, TimbreEvent, TempoEvent
from midi2mml.duration import division_remainder
from midi2mml.constants import MAX_LANES
from midi2mml.utils import M2MWarning, ConversionError

__all__ = ['Track', 'ChannelData', 'ReconcileWarning', 'SoundIntegrityError',
           'SoundCorrectionError', 'MusicIntegrityError', 'LaneExhausted']


class ReconcileWarning(M2MWarning):
    pass


class SoundIntegrityError(ConversionError):
    pass


class SoundCorrectionError(ConversionError):
    pass


class MusicIntegrityError(ConversionError):
    pass


class LaneExhausted(ConversionError):
    pass


class NoteData(object):
    __slots__ = ('key', 'tick', 'sub')

    def __init__(self, key, tick, sub):
        (self.key, self.tick, self.sub) = (key, tick, sub)


class ChannelData(object):
    """
    Number of lanes a MIDI channel needs in a track.

    Attributes:
        ch (int): MIDI channel number
        sub_max (int): largest lane number used in the channel
    """
    __slots__ = ('ch', 'sub_max')

    def __init__(self, ch, sub_max):
        (self.ch, self.sub_max) = (ch, sub_max)

    def __eq__(self, other):
        return (type(self) is type(other) and self.ch == other.ch and
                self.sub_max == other.sub_max)

    __hash__ = object.__hash__

    def __repr__(self):
        return "ChannelData(ch=%r, sub_max=%r)" % (self.ch, self.sub_max)

    def lanes(self):
        return range(self.sub_max + 1)


def _same_tick_order(ev1, ev2):
    # 同時刻のノートオンはキーの昇順、ノートオフは降順に並べる
    if ev1.t != ev2.t:
        return -1 if ev1.t < ev2.t else 1
    if isinstance(ev1, NoteOnEvent) and isinstance(ev2, NoteOnEvent):
        return (ev1.n > ev2.n) - (ev1.n < ev2.n)
    if isinstance(ev1, NoteOffEvent) and isinstance(ev2, NoteOffEvent):
        return (ev1.n < ev2.n) - (ev1.n > ev2.n)
    return 0


def _lane_key(ev):
    return (ev.ch, ev.sub, ev.t)


def _evstr(ev):
    return "Tick:%d Channel:%d Sub:%d Kind:%r" % (ev.t, ev.ch, ev.sub, ev)


def _warn(ev, message):
    warnings.warn("%s %s" % (_evstr(ev), message),
                  ReconcileWarning, stacklevel=3)


class Track(object):
    """
    This class holds the events of a MIDI track and converts them in three
    passes into a list in which each (channel, lane) pair carries a
    monophonic, grid-aligned sequence.

    Since tempo points disabled by one track must also be suppressed in all
    the other tracks, each pass has to be completed for all the tracks
    before any track starts the next pass (see :class:`.Converter`).

    Attributes:
        track_index (int): track number (base-0)
        events (list of Event): list of events
        channels (list of int): MIDI channels in order of appearance
        channel_data_list (list of ChannelData): channels that have
            at least one note, available after :meth:`assign_lanes`

    Args:
        track_index(int): value of the track_index attribute
    """
    """
    MIDIトラックのイベントを保持し、それらを3つのパスによって、
    各 (チャネル, レーン) が単音かつグリッドに揃った列を持つリストへ
    変換するクラスです。

    あるトラックで無効化されたテンポ点は他のすべてのトラックでも
    抑止されなければならないため、各パスはすべてのトラックについて
    完了してから次のパスを始める必要があります (:class:`.Converter` を
    参照)。
    """
    def __init__(self, track_index):
        self.track_index = track_index
        self.events = []  # type: List[Event]
        self.channels = []  # type: List[int]
        self.channel_data_list = []  # type: List[ChannelData]

    def __repr__(self):
        return "<Track %d: %d events>" % (self.track_index, len(self.events))

    def push_event(self, ev) -> None:
        self.events.append(ev)
        if ev.ch not in self.channels:
            self.channels.append(ev.ch)

    @staticmethod
    def _new_lane(notes):
        used = set(note.sub for note in notes.values())
        for lane in range(MAX_LANES):
            if lane not in used:
                return lane
        return None

    def _tempo_events(self, ledger):
        return [TempoEvent(point.tick, chdata.ch, point.bpm, sub=lane)
                for chdata in self.channel_data_list
                for point in ledger.enabled_points()
                for lane in chdata.lanes()]

    def insert_tempo(self, ledger) -> List[Event]:
        """
        Returns a new event list in which a copy of every enabled tempo
        point in `ledger` is placed in each lane, sorted by (channel, lane,
        tick). Inserted tempo events precede other events at the same time.
        """
        return sorted(self._tempo_events(ledger) + self.events, key=_lane_key)

    def assign_lanes(self, ledger) -> None:
        """
        Pass 1: assigns lanes to notes, broadcasts timbre changes to every
        lane of their channel, removes timbre changes in the middle of
        notes, disables tempo points in the middle of notes, and checks that
        every note-on is directly followed by its note-off.

        Args:
            ledger(TempoLedger): tempo ledger shared by all the tracks

        Raises:
            LaneExhausted: Too many simultaneous notes in a channel.
            SoundIntegrityError: A note-on is not followed by its note-off.
        """
        """
        パス1: ノートにレーンを割り当て、音色変更をそのチャネルのすべての
        レーンへ複製し、発音途中の音色変更を取り除き、発音途中のテンポ点を
        無効化し、各ノートオンの直後に対応するノートオフがあることを
        検査します。
        """
        events = sorted(self.events, key=cmp_to_key(_same_tick_order))
        events.sort(key=lambda ev: ev.ch)

        kept = []
        timbre_events = []
        valid_channels = set()
        self.channel_data_list = []
        for ch, group in itertools.groupby(events, key=lambda ev: ev.ch):
            notes = {}
            sub_max = 0
            for ev in group:
                if isinstance(ev, NoteOnEvent):
                    if ev.n in notes:
                        _warn(ev, "Continuous NoteOn is not supported.")
                        continue
                    lane = self._new_lane(notes)
                    if lane is None:
                        raise LaneExhausted(
                            "Failed to get subchannel. Track:%d Channel:%d "
                            "Tick:%d" % (self.track_index, ch, ev.t))
                    sub_max = max(sub_max, lane)
                    ev.sub = lane
                    notes[ev.n] = NoteData(ev.n, ev.t, lane)
                    valid_channels.add(ch)
                elif isinstance(ev, NoteOffEvent):
                    note = notes.pop(ev.n, None)
                    if note is None:
                        _warn(ev, "No Key to NoteOff was found.")
                        continue
                    ev.sub = note.sub
                elif isinstance(ev, TimbreEvent):
                    timbre_events.append(ev)
                else:
                    continue  # tempo changes are held by the ledger
                kept.append(ev)
            if ch in valid_channels:
                self.channel_data_list.append(ChannelData(ch, sub_max))

        timbre_copies = [ev.copy().update(sub=lane)
                         for ev in timbre_events
                         for chdata in self.channel_data_list
                         if chdata.ch == ev.ch
                         for lane in range(1, chdata.sub_max + 1)]
        events = sorted(self._tempo_events(ledger) + timbre_copies + kept,
                        key=_lane_key)
        events = [ev for ev in events if ev.ch in valid_channels]

        self.events = []
        for _, group in itertools.groupby(events, key=Event.lane):
            note_on = False
            for ev in group:
                if isinstance(ev, NoteOnEvent):
                    note_on = True
                elif isinstance(ev, NoteOffEvent):
                    note_on = False
                elif isinstance(ev, TempoEvent):
                    if note_on:
                        ledger.disable(ev.t)
                        _warn(ev, "Tempo changes in the middle of a sound "
                              "are not supported.")
                    continue
                elif isinstance(ev, TimbreEvent) and note_on:
                    _warn(ev, "Timbre changes in the middle of a sound "
                          "are not supported.")
                    continue
                self.events.append(ev)

        self.check_note_pairs()

    def check_note_pairs(self) -> None:
        """
        Checks that each note-on is immediately followed by the note-off
        of the same key in the same lane at a later time.

        Raises:
            SoundIntegrityError: the check failed.
        """
        for i, ev in enumerate(self.events):
            if not isinstance(ev, NoteOnEvent):
                continue
            nxt = self.events[i + 1] if i + 1 < len(self.events) else None
            if not (isinstance(nxt, NoteOffEvent) and nxt.n == ev.n and
                    nxt.lane() == ev.lane() and nxt.t > ev.t):
                raise SoundIntegrityError(
                    "Sound integrity failed. Track:%d\n  %s\n  %s" %
                    (self.track_index, _evstr(ev),
                     _evstr(nxt) if nxt is not None else "(end of track)"))

    def quantize(self, ticks_per_beat, ledger) -> None:
        """
        Pass 2: moves note-ons and note-offs backward so that the interval
        from the previous event in the same lane can be written with
        canonical note lengths. Tempo points that cannot be placed on the
        grid are disabled in `ledger`.

        Args:
            ticks_per_beat(int): resolution (ticks per quarter note)
            ledger(TempoLedger): tempo ledger shared by all the tracks

        Raises:
            SoundCorrectionError: Events in a lane are out of order after
                the correction.
        """
        """
        パス2: 同じレーンの直前のイベントからの間隔が標準音長で書けるよう、
        ノートオンおよびノートオフを前へずらします。グリッドに置けない
        テンポ点は `ledger` 中で無効化されます。
        """
        if not self.events:
            return
        events = self.insert_tempo(ledger)
        lane = None
        pre_tick = 0
        for ev in events:
            if ev.lane() != lane:
                lane = ev.lane()
                pre_tick = 0
            if isinstance(ev, NoteEventClass):
                remainder = division_remainder(ticks_per_beat,
                                               ev.t - pre_tick)
                if remainder:
                    _warn(ev, "Corrects %s timing." %
                          ('NoteOn' if isinstance(ev, NoteOnEvent)
                           else 'NoteOff'))
                    ev.t -= remainder
                pre_tick = ev.t
            elif isinstance(ev, TempoEvent):
                remainder = division_remainder(ticks_per_beat,
                                               ev.t - pre_tick)
                if remainder:
                    ledger.disable(ev.t)
                    _warn(ev, "Unsupport Change Tempo timing.")
                else:
                    pre_tick = ev.t

        self.events = [ev for ev in events if not isinstance(ev, TempoEvent)]
        if not self.lanes_in_order():
            raise SoundCorrectionError("Sound correction failed. Track:%d" %
                                       self.track_index)

    def verify(self, ledger) -> None:
        """
        Pass 3: inserts the tempo points that survived all the previous
        decisions into every lane and checks the order of events again.
        After this pass, `events` contains the tempo changes as well.

        Args:
            ledger(TempoLedger): tempo ledger shared by all the tracks

        Raises:
            MusicIntegrityError: Events in a lane are out of order.
        """
        if not self.events:
            return
        self.events = self.insert_tempo(ledger)
        if not self.lanes_in_order():
            raise MusicIntegrityError("Music integrity failed. Track:%d" %
                                      self.track_index)

    def lanes_in_order(self) -> bool:
        return all(ev1.t <= ev2.t
                   for ev1, ev2 in zip(self.events, self.events[1:])
                   if ev1.lane() == ev2.lane())
