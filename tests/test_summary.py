import re
import threading

import pytest

from sweepkit.stats import Stats
from sweepkit.summary import ManualTimer, ScopedTimer, StatsSummary, TimerSummary


def _stats_of(*values):
    s = Stats()
    for v in values:
        s.add(v)
    return s


def test_new_summary_is_empty():
    summary = StatsSummary()
    assert summary.empty() is True
    assert len(summary) == 0
    assert summary.name == "stats"


def test_add_creates_entry():
    summary = StatsSummary()
    values = [1.0, 4.0, 2.0]
    for v in values:
        summary.add("a", v)
    got = summary.get_stats("a")
    assert got.count() == len(values)
    assert got.sum() == sum(values)
    assert got.max() == max(values)
    assert got.last() == values[-1]
    assert len(summary) == 1


def test_merge_ignores_empty_stats():
    summary = StatsSummary()
    summary.merge("a", Stats())
    assert summary.empty() is True


def test_merge_accumulates():
    summary = StatsSummary()
    first = _stats_of(1.0, 2.0)
    second = _stats_of(3.0)
    summary.merge("a", first)
    summary.merge("a", second)
    got = summary.get_stats("a")
    assert got.count() == first.count() + second.count()
    assert got.sum() == first.sum() + second.sum()
    assert got.min() == first.min()


def test_get_stats_missing_is_empty():
    assert StatsSummary().get_stats("missing").ok() is False


def test_get_stats_is_a_copy():
    summary = StatsSummary()
    summary.add("a", 1.0)
    copy_ = summary.get_stats("a")
    copy_.add(5.0)
    assert summary.get_stats("a").count() == 1


def test_get_ref_is_live():
    summary = StatsSummary()
    ref = summary.get_ref("a")
    ref.add(2.0)
    assert summary.get_stats("a").count() == 1
    assert summary.get_ref("a") is ref


def test_report_all_sorted():
    summary = StatsSummary()
    for key in ["zeta", "alpha", "mid"]:
        summary.add(key, 1.0)
    report = summary.report_all(sort=True)
    lines = report.split("\n")
    assert lines[0] == "Manager: stats"
    assert len(lines) == 4
    positions = [report.index(key) for key in ["alpha", "mid", "zeta"]]
    assert positions == sorted(positions)


def test_report_uses_manager_prefix_and_padding():
    summary = StatsSummary("mgr")
    summary.add("foo", 1.0)
    line = summary.report("foo")
    match = re.search(r"\[(mgr/foo\s*)\]", line)
    assert match is not None
    assert len(match.group(1)) == 16
    assert " n: 1 " in line


def test_concurrent_adds():
    summary = StatsSummary()
    threads_n, per_thread = 4, 100

    def work():
        for _ in range(per_thread):
            summary.add("x", 1.0)

    threads = [threading.Thread(target=work) for _ in range(threads_n)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert summary.get_stats("x").count() == threads_n * per_thread


def test_manual_timer_requires_manager():
    with pytest.raises(ValueError):
        ManualTimer("t", None)


def test_manual_timer_commit():
    summary = TimerSummary()
    timer = summary.manual("work")
    timer.stop(record=False)
    timer.commit()
    got = summary.get_stats("work")
    assert got.count() == 1
    assert got.min() >= 0


def test_manual_timer_commit_resets_local_stats():
    summary = TimerSummary()
    timer = summary.manual("work")
    timer.commit()
    timer.start()
    timer.commit()
    assert summary.get_stats("work").count() == 2


def test_scoped_timer_commits_on_exit():
    summary = TimerSummary()
    with summary.scoped("block") as timer:
        assert isinstance(timer, ScopedTimer)
        assert summary.empty() is True
    assert summary.get_stats("block").count() == 1


def test_scoped_timer_commits_on_exception():
    summary = TimerSummary()
    with pytest.raises(RuntimeError):
        with summary.scoped("block"):
            raise RuntimeError("boom")
    assert summary.get_stats("block").count() == 1


def test_timer_report_formats_durations():
    summary = TimerSummary()
    summary.add("t", 1_500_000)
    line = summary.report("t")
    assert "1.5ms" in line
    assert "[timers/t" in line
    assert summary.report_all().split("\n")[0] == "Manager: timers"