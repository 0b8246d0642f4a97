# coding:utf-8
"""
This module defines the tempo ledger, the list of tempo points shared by
all the tracks during conversion.
"""
"""
このモジュールには、変換中にすべてのトラックによって共有されるテンポ点の
リストであるテンポ台帳が定義されています。
"""
# Copyright (C) 2025  The midi2mml authors

from typing import Iterator, List

__all__ = ['TempoPoint', 'TempoLedger']


class TempoPoint(object):
    """
    A tempo change at a specific tick.

    Attributes:
        tick (int): time in ticks
        bpm (int): tempo value in beats per minute
        enabled (bool): False if the tempo change has been found
            unrepresentable and must be suppressed in every track.
    """
    __slots__ = ('tick', 'bpm', 'enabled')

    def __init__(self, tick, bpm, enabled=True):
        (self.tick, self.bpm, self.enabled) = (tick, bpm, enabled)

    def __eq__(self, other):
        return (type(self) is type(other) and self.tick == other.tick and
                self.bpm == other.bpm and self.enabled == other.enabled)

    __hash__ = object.__hash__

    def __repr__(self):
        return "TempoPoint(tick=%r, bpm=%r, enabled=%r)" % \
            (self.tick, self.bpm, self.enabled)


class TempoLedger(object):
    """
    This class holds the tempo points of the whole file. Points are added
    while the tracks are read, deduplicated once with :meth:`dedup`, and
    afterwards only their `enabled` flags change. Since a point disabled by
    one track must also disappear from all the other tracks, a single
    ledger is passed to every track in each pass of the conversion.
    """
    """
    ファイル全体のテンポ点を保持するクラスです。テンポ点はトラックを読む間に
    追加され、:meth:`dedup` によって一度だけ重複除去され、以後は `enabled`
    フラグのみが変化します。あるトラックで無効化されたテンポ点は他のすべての
    トラックからも消えなければならないため、変換の各パスでは単一の台帳が
    すべてのトラックに渡されます。
    """
    def __init__(self, points=()):
        self.points = list(points)  # type: List[TempoPoint]
        self.frozen = False

    def __len__(self):
        return len(self.points)

    def __iter__(self) -> Iterator[TempoPoint]:
        return iter(self.points)

    def __getitem__(self, index) -> TempoPoint:
        return self.points[index]

    def __repr__(self):
        return "<TempoLedger %r>" % (self.points,)

    def add(self, tick, bpm) -> None:
        """ Appends a tempo point. Not allowed after :meth:`dedup`. """
        if self.frozen:
            raise RuntimeError("cannot add tempo points after dedup()")
        self.points.append(TempoPoint(tick, bpm))

    def dedup(self) -> None:
        """
        Sorts the points by time and removes redundant ones.
        Among points at the same tick, the last one in file order is kept.
        A point whose tempo value equals that of the nearest preceding kept
        point is removed.
        """
        """
        テンポ点を時刻順に整列し、冗長なものを取り除きます。
        同じティックにあるテンポ点のうちファイル上で最後のものが残されます。
        直前に残されたテンポ点と同じテンポ値を持つテンポ点は削除されます。
        """
        self.points.sort(key=lambda p: p.tick)
        kept = []
        for point in self.points:
            if kept and kept[-1].tick == point.tick:
                kept.pop()
            if kept and kept[-1].bpm == point.bpm:
                continue
            kept.append(point)
        self.points = kept
        self.frozen = True

    def enabled_points(self) -> List[TempoPoint]:
        return [p for p in self.points if p.enabled]

    def disable(self, tick) -> bool:
        """
        Suppresses the tempo point at `tick`. The point stays in the
        ledger so that every track can see the decision.

        Returns:
            True if an enabled point was found at `tick`.
        """
        changed = False
        for point in self.points:
            if point.tick == tick and point.enabled:
                point.enabled = False
                changed = True
        return changed

    def is_enabled(self, tick) -> bool:
        return any(p.enabled for p in self.points if p.tick == tick)
