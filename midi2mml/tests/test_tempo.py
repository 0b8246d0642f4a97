import pytest
import random
from midi2mml import *

random.seed(0)


def ledger_of(*points):
    ledger = TempoLedger()
    for tick, bpm in points:
        ledger.add(tick, bpm)
    ledger.dedup()
    return ledger


def test_dedup():
    ledger = ledger_of((0, 120), (10, 120), (20, 100), (30, 120), (40, 120))
    assert [(p.tick, p.bpm) for p in ledger] == [(0, 120), (20, 100),
                                                 (30, 120)]
    # the previous kept tempo is carried across removed points
    ledger = ledger_of((0, 90), (10, 90), (20, 90), (30, 91))
    assert [(p.tick, p.bpm) for p in ledger] == [(0, 90), (30, 91)]
    assert all(p.enabled for p in ledger)


def test_dedup_order():
    # tempo events of later tracks may come earlier in time
    ledger = ledger_of((480, 100), (0, 120), (960, 120))
    assert [(p.tick, p.bpm) for p in ledger] == [(0, 120), (480, 100),
                                                 (960, 120)]
    # the last one wins at the same tick
    ledger = ledger_of((0, 120), (0, 100), (480, 100))
    assert [(p.tick, p.bpm) for p in ledger] == [(0, 100)]
    assert len(ledger_of()) == 0


def test_dedup_random():
    for count in range(100):
        ticks = sorted(random.sample(range(10000), random.randrange(1, 30)))
        points = [(t, random.choice([60, 90, 120])) for t in ticks]
        ledger = ledger_of(*points)
        assert ledger[0] == TempoPoint(*points[0])
        assert all(p1.bpm != p2.bpm for p1, p2 in zip(ledger, ledger[1:]))


def test_disable():
    ledger = ledger_of((0, 120), (100, 140), (200, 160))
    assert ledger.disable(100)
    assert not ledger.disable(100)
    assert not ledger.disable(50)
    assert [p.tick for p in ledger.enabled_points()] == [0, 200]
    assert not ledger.is_enabled(100) and ledger.is_enabled(200)
    assert len(ledger) == 3
    with pytest.raises(RuntimeError):
        ledger.add(300, 80)


def test_dedup_same_tick():
    # at the same tick, the later point replaces the earlier one
    ledger = ledger_of((0, 120), (0, 140), (480, 100))
    assert [(p.tick, p.bpm) for p in ledger] == [(0, 140), (480, 100)]
    ledger = ledger_of((480, 90), (0, 120), (480, 100), (480, 120))
    assert [(p.tick, p.bpm) for p in ledger] == [(0, 120)]
    for count in range(100):
        points = [(random.randrange(0, 2000, 480), random.choice([60, 90]))
                  for _ in range(random.randrange(1, 10))]
        ledger = ledger_of(*points)
        first_tick = min(t for t, _ in points)
        assert ledger[0].tick == first_tick
        assert ledger[0].bpm == [b for t, b in points if t == first_tick][-1]
        assert all(p1.tick < p2.tick and p1.bpm != p2.bpm
                   for p1, p2 in zip(ledger, ledger[1:]))
