import pytest

from activity_sched.algorithms import (
    Fifo,
    Lifo,
    RoundRobin,
    build_algorithm,
    build_all,
    schedule_fifo,
    schedule_lifo,
    schedule_rr,
)
from activity_sched.models import Activity


def _acts():
    return [
        Activity("A", arrival_time=0, service_time=5),
        Activity("B", arrival_time=1, service_time=3),
    ]


def _mixed():
    return [
        Activity("A", arrival_time=2, service_time=1),
        Activity("B", arrival_time=0, service_time=2),
        Activity("C", arrival_time=0, service_time=1),
        Activity("D", arrival_time=9, service_time=4),
        Activity("E", arrival_time=3, service_time=6),
    ]


def _completion(result):
    return {a.name: a.completion_time for a in result.activities}


def test_fifo_example():
    res = schedule_fifo(_acts())
    assert [a.name for a in res.activities] == ["A", "B"]
    assert _completion(res) == {"A": 5, "B": 8}

    a, b = res.activities
    assert (a.turnaround_time, a.wait_time, a.service_ratio) == (5, 0, 1.0)
    assert (b.turnaround_time, b.wait_time) == (7, 4)
    assert b.service_ratio == pytest.approx(3 / 7)

    assert res.avg_turnaround == 6.0
    assert res.avg_wait == 2.0
    assert res.avg_service_ratio == pytest.approx(0.7143, abs=1e-4)
    assert res.quantum is None


def test_lifo_matches_fifo_without_simultaneous_arrivals():
    assert _completion(schedule_lifo(_acts())) == _completion(schedule_fifo(_acts()))


def test_lifo_prefers_latest_index_among_ready():
    acts = [
        Activity("A", arrival_time=0, service_time=2),
        Activity("B", arrival_time=0, service_time=3),
        Activity("C", arrival_time=0, service_time=1),
    ]
    lifo = schedule_lifo(acts)
    assert [a.name for a in lifo.activities] == ["C", "B", "A"]
    assert _completion(lifo) == {"C": 1, "B": 4, "A": 6}

    fifo = schedule_fifo(acts)
    assert [a.name for a in fifo.activities] == ["A", "B", "C"]


def test_fifo_restarts_scan_from_front():
    res = schedule_fifo(_mixed()[:3])
    # B runs first (A not arrived); by then A is ready and precedes C.
    assert [a.name for a in res.activities] == ["B", "A", "C"]
    assert _completion(res) == {"B": 2, "A": 3, "C": 4}


def test_fifo_skips_idle_time():
    acts = [
        Activity("A", arrival_time=3, service_time=2),
        Activity("B", arrival_time=10, service_time=1),
    ]
    assert _completion(schedule_fifo(acts)) == {"A": 5, "B": 11}
    assert _completion(schedule_lifo(acts)) == {"A": 5, "B": 11}


def test_rr_example_quantum_2():
    res = schedule_rr(_acts(), quantum=2)
    assert [a.name for a in res.activities] == ["B", "A"]
    assert _completion(res) == {"A": 8, "B": 7}
    assert res.quantum == 2

    b, a = res.activities
    assert (b.turnaround_time, b.wait_time, b.service_ratio) == (6, 3, 0.5)
    assert (a.turnaround_time, a.wait_time, a.service_ratio) == (8, 3, 0.625)


def test_rr_passes_over_unarrived_activity():
    res = schedule_rr(_mixed(), quantum=2)
    # A is not ready at t=0 while B and C are, so the cursor moves past it.
    assert [a.name for a in res.activities] == ["B", "C", "A", "E", "D"]
    assert _completion(res) == {"B": 2, "C": 3, "A": 6, "E": 10, "D": 14}


def test_rr_skips_idle_time():
    acts = [
        Activity("A", arrival_time=0, service_time=1),
        Activity("B", arrival_time=10, service_time=2),
    ]
    assert _completion(schedule_rr(acts, quantum=1)) == {"A": 1, "B": 12}


def test_rr_large_quantum_matches_fifo():
    acts = [
        Activity("A", arrival_time=0, service_time=3),
        Activity("B", arrival_time=1, service_time=2),
        Activity("C", arrival_time=2, service_time=4),
        Activity("D", arrival_time=10, service_time=1),
    ]
    rr = schedule_rr(acts, quantum=max(a.service_time for a in acts))
    fifo = schedule_fifo(acts)
    assert [a.name for a in rr.activities] == [a.name for a in fifo.activities]
    assert _completion(rr) == _completion(fifo) == {"A": 3, "B": 5, "C": 9, "D": 11}


@pytest.mark.parametrize("quantum", [0, -3])
def test_rr_invalid_quantum_gives_empty_result(quantum):
    res = schedule_rr(_acts(), quantum=quantum)
    assert res.activities == []
    assert res.avg_turnaround == res.avg_wait == res.avg_service_ratio == 0.0


@pytest.mark.parametrize("algorithm", [Fifo(), Lifo(), RoundRobin(1), RoundRobin(3)])
def test_metric_invariants(algorithm):
    acts = _mixed()
    res = algorithm.run(acts)

    assert sorted(a.name for a in res.activities) == sorted(a.name for a in acts)
    for a in res.activities:
        assert a.completion_time >= a.arrival_time + a.service_time
        assert a.turnaround_time == a.completion_time - a.arrival_time
        assert a.wait_time == a.turnaround_time - a.service_time >= 0
        assert 0 < a.service_ratio <= 1


@pytest.mark.parametrize("algorithm", [Fifo(), Lifo(), RoundRobin(2)])
def test_deterministic_and_input_untouched(algorithm):
    acts = _mixed()
    before = list(acts)
    first = algorithm.run(acts)
    second = algorithm.run(acts)
    assert first.activities == second.activities
    assert acts == before


def test_duplicate_names_are_kept():
    acts = [Activity("X", 0, 1), Activity("X", 0, 2)]
    for res in (schedule_fifo(acts), schedule_lifo(acts), schedule_rr(acts, 1)):
        assert [a.name for a in res.activities] == ["X", "X"]


def test_build_algorithm():
    assert isinstance(build_algorithm("FIFO"), Fifo)
    assert isinstance(build_algorithm("lifo"), Lifo)
    rr = build_algorithm("rr", quantum=4)
    assert isinstance(rr, RoundRobin) and rr.quantum == 4
    assert [alg.name for alg in build_all(2)] == ["fifo", "lifo", "rr"]

    with pytest.raises(ValueError):
        build_algorithm("sjf")
    with pytest.raises(ValueError):
        build_algorithm("rr")
