import threading

from fakes import ManualSource, Recorder
from lazyfuture import Trace, failed, never, succeeded


def test_traced_records_fork_and_outcome() -> None:
    trace = Trace()
    rec = Recorder()
    rec.run(succeeded(1).traced(trace, "ok"))
    rec.run(failed("e").traced(trace, "bad"))

    assert rec.resolved == [1]
    assert rec.rejected == ["e"]
    assert trace.actions("ok") == ["fork", "resolved"]
    assert trace.actions("bad") == ["fork", "rejected"]


def test_outcome_is_child_of_fork() -> None:
    trace = Trace()
    Recorder().run(succeeded(1).traced(trace, "a"))
    fork, resolved = trace.get_events()
    assert resolved.parent_id == fork.id
    assert trace.as_tree() == {None: [fork.id], fork.id: [resolved.id]}


def test_pending_future_only_records_fork() -> None:
    trace = Trace()
    Recorder().run(never().traced(trace, "idle"))
    assert trace.actions() == ["fork"]


def test_traced_release_forwards_cleanup() -> None:
    trace = Trace()
    source = ManualSource()
    source.future().traced(trace, "src").release()
    assert trace.actions("src") == ["release"]
    assert source.releases == 1


def test_race_loser_release_is_traced() -> None:
    trace = Trace()
    left = ManualSource()
    right = ManualSource()
    rec = Recorder()
    rec.run(left.future().traced(trace, "left").concat(right.future().traced(trace, "right")))

    left.resolve("win")

    assert rec.resolved == ["win"]
    assert trace.actions("left") == ["fork", "resolved"]
    assert trace.actions("right") == ["fork", "release"]
    assert right.releases == 1


def test_disabled_trace_records_nothing() -> None:
    trace = Trace(enabled=False)
    assert trace.record("fork") is None
    Recorder().run(succeeded(1).traced(trace, "x"))
    assert len(trace) == 0


def test_clear_resets_ids() -> None:
    trace = Trace()
    trace.record("fork")
    trace.clear()
    assert len(trace) == 0
    assert trace.record("fork") == 0


def test_evidence_label() -> None:
    trace = Trace()
    trace.record("fork", info={"label": "a"})
    trace.record("fork")
    labels = [ev.label for ev in trace.get_events()]
    assert labels == ["a", None]


def test_len_counts_events_from_many_threads() -> None:
    trace = Trace()
    threads = [
        threading.Thread(target=lambda: [trace.record("fork") for _ in range(100)])
        for _ in range(4)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(trace) == 400
    assert sorted(ev.id for ev in trace.get_events()) == list(range(400))
