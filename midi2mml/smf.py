# coding:utf-8
"""
This module defines a function to read standard MIDI files (SMF) into
the decoded form consumed by the converter.
"""
"""
このモジュールには、標準MIDIファイル(SMF)を読んで、変換器が受け取る
デコード済みの形式にするための関数が定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

from struct import unpack
import warnings
import sys
from typing import List, Optional, Tuple
from midi2mml.event import midimsg_size
from midi2mml.constants import S_SYSEX, S_META
from midi2mml.utils import M2MWarning, ConversionError

__all__ = ['readsmf', 'SMFData', 'SMFError', 'SMFWarning',
           'UnsupportedTiming']


TrackData = List[Tuple[int, Optional[int], bytes]]


class SMFError(Exception):
    pass


class SMFWarning(M2MWarning):
    pass


class UnsupportedTiming(ConversionError):
    pass


class SMFData(object):
    """
    Contents of a decoded standard MIDI file.

    Attributes:
        ticks_per_beat (int): resolution (ticks per quarter note)
        smf_format (int): SMF format (0, 1, or 2)
        tracks (list of list of tuple): for each track, a list of
            (delta_ticks, channel, message) tuples. `channel` is the
            base-0 MIDI channel for channel messages and None for meta and
            system-exclusive messages. `message` holds the status byte
            followed by the data bytes; meta events are stored as
            0xff, type, data... and system-exclusive messages as
            0xf0, data....
    """
    def __init__(self, ticks_per_beat, tracks=None, smf_format=1):
        self.ticks_per_beat = ticks_per_beat
        self.tracks = [] if tracks is None else tracks
        self.smf_format = smf_format

    def __repr__(self):
        return "<SMFData ticks_per_beat=%r format=%r ntrks=%d>" % \
            (self.ticks_per_beat, self.smf_format, len(self.tracks))


class SMFReader(object):
    def read(self, fp) -> SMFData:
        self.read_header_string(fp, 'MThd')
        try:
            (hdrsize, fmt, ntrks, division) = unpack(">Lhhh", fp.read(10))
            assert hdrsize >= 6 and 0 <= fmt <= 2 and ntrks >= 0
        except Exception:
            raise SMFError("Bad file header") from None
        if division < 0:
            frames_per_second = -(division >> 8)
            ticks_per_frame = division & 0xff
            raise UnsupportedTiming(
                "Ticks per frame: %d\nFrames per second: %d\n"
                "MIDI files with timecode are not supported."
                % (ticks_per_frame, frames_per_second))
        if division == 0:
            raise SMFError("Bad file header")
        # skip the rest of a header longer than 6 bytes
        fp.read(hdrsize - 6)
        data = SMFData(division, smf_format=fmt)
        for self.cur_track in range(ntrks):
            data.tracks.append(self.read_track(fp))
        return data

    def read_track(self, fp) -> TrackData:
        track = []
        self.read_header_string(fp, 'MTrk')
        self.run_st = 0
        try:
            (trksize,) = unpack(">L", fp.read(4))
        except Exception:
            raise SMFError("Bad track header") from None
        buf = fp.read(trksize)
        if len(buf) != trksize:
            raise SMFError("No sufficient track data")
        inp = iter(buf)
        try:
            while True:
                item = self.read_event(inp)
                if not item:
                    break
                track.append(item)
        except StopIteration:
            raise SMFError("Unexpected EOF") from None
        return track

    def read_event(self, inp):
        try:
            delta_ticks = self.read_varlen(inp)
        except StopIteration:
            return None
        status = next(inp)
        msg = bytearray()
        ch = None
        if status in (0xf0, 0xf7):  # sysex
            length = self.read_varlen(inp)
            msg.append(S_SYSEX)
        elif status == S_META:
            mtype = next(inp)
            length = self.read_varlen(inp)
            msg.extend((S_META, mtype))
        else:
            if status >= 0x80:
                if status < 0xf0:
                    self.run_st = status
                msg.append(status)
                length = midimsg_size(status) - 1
            else:
                if not self.run_st:
                    raise SMFError("No MIDI running status")
                msg.extend((self.run_st, status))
                length = midimsg_size(self.run_st) - 2
            if msg[0] < 0xf0:
                ch = msg[0] & 0xf
        for _ in range(length):
            msg.append(next(inp))
        return (delta_ticks, ch, bytes(msg))

    def read_varlen(self, inp):
        value = 0
        c = 0x80
        while c & 0x80:
            c = next(inp)
            value = (value << 7) + (c & 0x7f)
        return value

    # Read a header string ("MThd", "MTrk", etc.) with skipping leading garbage
    def read_header_string(self, fp, chunkname):
        # Assume that chunk name consists of 4 different characters
        state = 0
        while state < 4:
            c = fp.read(1)
            if not c:
                raise SMFError("Could not find header %r" % chunkname)
            if ord(c) == ord(chunkname[state]):
                state += 1
            else:
                warnings.warn("ignoring garbage data",
                              SMFWarning, stacklevel=2)
                state = 0


def readsmf(filename) -> SMFData:
    """ Reads a standard MIDI file and returns its decoded contents.
    Only MIDI files whose division is given in ticks per quarter note
    are accepted.

    Args:
        filename(str): file name ('-' for standard input)

    Returns:
        An SMFData object holding the resolution and, for each track,
        the list of (delta_ticks, channel, message) tuples.

    Raises:
        SMFError: The file is not a well-formed SMF.
        UnsupportedTiming: The division of the file is time-code based.
    """
    """ 標準MIDIファイルを読んで、デコードされた内容を返します。
    分解能が4分音符あたりのティック数で与えられたMIDIファイルのみ
    受け付けます。

    Args:
        filename(str): ファイル名 ('-' なら標準入力)

    Returns:
        分解能と、トラック毎の (delta_ticks, channel, message) タプルの
        リストを保持した SMFData オブジェクト

    Raises:
        SMFError: ファイルが正しい形式のSMFではありません。
        UnsupportedTiming: ファイルの分解能がタイムコードに基づいています。
    """
    if filename == '-':
        return SMFReader().read(sys.stdin.buffer)
    else:
        with open(filename, "rb") as fp:
            return SMFReader().read(fp)
