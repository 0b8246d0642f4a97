# coding:utf-8
"""
This module defines classes for the timed events handled by the converter
and a function for converting a MIDI message into such an event.
"""
"""
このモジュールには、変換器が扱う時刻付きイベントのクラス群と、
MIDIメッセージをそのようなイベントへ変換する関数が定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

import warnings
import numbers
from typing import Optional
from midi2mml.constants import S_NOTEOFF, S_NOTEON, S_KPR, S_CTRL, \
     S_PROG, S_CPR, S_BEND, S_SYSEX, S_META, M_TEMPO
from midi2mml.utils import M2MWarning, velocity_to_volume, usecs_to_bpm

__all__ = ['MidiEventWarning', 'Event', 'NoteEventClass', 'NoteOnEvent',
           'NoteOffEvent', 'TimbreEvent', 'TempoEvent', 'midimsg_size',
           'message_to_event']


class MidiEventWarning(M2MWarning): pass


class Event(object):
    """ Base class for all events.
    Events are values: two events are equal when their classes match and all
    the attribute values are equal. Use copy() or update() to derive new
    events.

    Attributes:
        t (int): absolute time in ticks
        ch (int): MIDI channel number (base-0)
        sub (int): sub-channel (lane) number within the MIDI channel

    Args:
        t(int): value of the t attribute
        ch(int): value of the ch attribute
        sub(int, optional): value of the sub attribute
    """
    """ すべてのイベントの基底クラスです。
    イベントは値として扱われ、クラスが一致しすべての属性値が等しいとき
    等価になります。新しいイベントを得るには copy() や update() を
    使います。

    Attributes:
        t (int): ティック単位で表されたイベントの絶対時刻
        ch (int): MIDIチャネル番号 (0から始まる)
        sub (int): MIDIチャネル内のサブチャネル(レーン)番号

    Args:
        t(int): t属性の値
        ch(int): ch属性の値
        sub(int, optional): sub属性の値
    """

    __slots__ = ('t',    # time in ticks
                 'ch',   # MIDI channel number (base-0)
                 'sub')  # lane number

    def __init__(self, t, ch, sub=0):
        if not isinstance(t, numbers.Integral) or t < 0:
            raise TypeError("time must be non-negative int")
        (self.t, self.ch, self.sub) = (t, ch, sub)

    def _args(self):
        return ()

    def copy(self) -> 'Event':
        """
        Returns a duplicated event.
        """
        return self.__class__(self.t, self.ch, *self._args(), sub=self.sub)
    __copy__ = copy

    def update(self, **kwargs) -> 'Event':
        """
        Changes attribute values according to `kwargs`.

        Returns:
            self
        """
        for k, v in kwargs.items():
            setattr(self, k, v)
        return self

    def __eq__(self, other):
        return (type(self) is type(other) and
                all(all(getattr(self, key) == getattr(other, key)
                        for key in cls.__slots__)
                    for cls in self.__class__.__mro__ if cls is not object))

    __hash__ = object.__hash__

    def _getattrs(self):
        return [key for cls in reversed(self.__class__.__mro__)
                if cls is not object for key in cls.__slots__]

    def __repr__(self):
        params = ["%s=%r" % (k, getattr(self, k)) for k in self._getattrs()]
        return "%s(%s)" % (self.__class__.__name__, ', '.join(params))

    def lane(self):
        """ Returns the (channel, lane) pair of the event. """
        return (self.ch, self.sub)


class NoteEventClass(Event):
    """
    Base class for NoteOnEvent and NoteOffEvent.

    Attributes:
        n (int): MIDI note number
        v (int): volume (0-100)
    """
    __slots__ = ('n',  # MIDI note number
                 'v')  # volume in MML scale

    def __init__(self, t, ch, n, v, sub=0):
        (self.n, self.v) = (n, v)
        super().__init__(t, ch, sub)

    def _args(self):
        return (self.n, self.v)


class NoteOnEvent(NoteEventClass):
    """ Class for note-on events. """
    __slots__ = ()


class NoteOffEvent(NoteEventClass):
    """ Class for note-off events. """
    __slots__ = ()


class TimbreEvent(Event):
    """ Class for timbre (program) changes.

    Attributes:
        value (int): program number (0-127)
    """
    __slots__ = ('value',)

    def __init__(self, t, ch, value, sub=0):
        self.value = value
        super().__init__(t, ch, sub)

    def _args(self):
        return (self.value,)


class TempoEvent(Event):
    """ Class for tempo changes.

    Attributes:
        value (int): tempo in beats per minute
    """
    __slots__ = ('value',)

    def __init__(self, t, ch, value, sub=0):
        self.value = value
        super().__init__(t, ch, sub)

    def _args(self):
        return (self.value,)


_msg_size_table = (3, 3, 3, 3, 2, 2, 3, 0)


def midimsg_size(status) -> int:
    """ Returns the length of a MIDI message from its status byte.

    Args:
        status(int): value of the MIDI status byte

    Returns:
        length of the message
    """
    """ MIDIメッセージのステータスバイトからメッセージの長さを求めます。

    Args:
        status(int): MIDIステータスバイトの値

    Returns:
        メッセージの長さ
    """
    return (-1 if status < 0x80 or status >= 0x100 else
            _msg_size_table[(status >> 4) & 7] if status <= 0xf0 else
            2 if status in (0xf1, 0xf3) else
            3 if status == 0xf2 else
            1)


def message_to_event(msg, time, ch) -> Optional[Event]:
    """ Converts a raw MIDI message to an event. Messages the converter
    does not handle (controllers, pitch bends, aftertouch, system exclusive,
    and meta events other than set-tempo) yield None.

    Args:
        msg(bytes, bytearray, or iterable of int): input message
        time(int): absolute time of the event in ticks
        ch(int or None): MIDI channel number; it should be None for
            meta and system-exclusive messages.

    Returns:
        The resulting event, or None
    """
    """ MIDIメッセージのバイト列をイベントへ変換します。変換器が扱わない
    メッセージ (コントロールチェンジ、ピッチベンド、アフタータッチ、
    システムエクスクルーシブ、セットテンポ以外のメタイベント) に対しては
    None を返します。

    Args:
        msg(bytes, bytearray, or iterable of int): 入力バイト列
        time(int): ティック単位のイベントの時刻
        ch(int or None): MIDIチャネル番号。メタイベントやシステム
            エクスクルーシブでは None とします。

    Returns:
        作成されたイベント、または None
    """
    msg = bytes(msg)
    if msg[0] == S_META:
        if msg[1] == M_TEMPO and len(msg) >= 5:
            usecs_per_beat = (msg[2] << 16) + (msg[3] << 8) + msg[4]
            return TempoEvent(time, 0, usecs_to_bpm(usecs_per_beat))
        return None
    elif msg[0] == S_SYSEX:
        return None
    etype = msg[0] & 0xf0
    if ch is None:
        ch = msg[0] & 0xf
    if etype == S_NOTEOFF:
        return NoteOffEvent(time, ch, msg[1], msg[2])
    elif etype == S_NOTEON:
        if msg[2] == 0:
            return NoteOffEvent(time, ch, msg[1], 0)
        else:
            return NoteOnEvent(time, ch, msg[1], velocity_to_volume(msg[2]))
    elif etype == S_PROG:
        return TimbreEvent(time, ch, msg[1])
    elif etype in (S_KPR, S_CTRL, S_CPR, S_BEND):
        return None
    else:
        warnings.warn("unrecognized MIDI message: %r" % msg,
                      MidiEventWarning, stacklevel=2)
        return None
