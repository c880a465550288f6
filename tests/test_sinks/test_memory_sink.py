"""Tests for the in-memory sink and the sink base contract."""

from framepace.sinks import MemorySink


class TestMemorySink:
    def test_records_pushes(self):
        sink = MemorySink()
        sink.push(b"a")
        sink.push(b"b")
        assert sink.blobs == [b"a", b"b"]

    def test_end_reports_success(self):
        sink = MemorySink()
        outcomes = []
        sink.subscribe_outcome(outcomes.append)
        sink.end()
        assert [o.success for o in outcomes] == [True]

    def test_fail_with(self):
        sink = MemorySink(fail_with="nope")
        sink.end()
        assert sink.outcome.success is False
        assert sink.outcome.message == "nope"

    def test_single_outcome(self):
        sink = MemorySink(auto_complete=False)
        outcomes = []
        sink.subscribe_outcome(outcomes.append)
        sink.end()
        assert outcomes == []
        sink.fail("first")
        sink.complete()
        assert len(outcomes) == 1
        assert outcomes[0].message == "first"

    def test_late_subscriber_gets_outcome(self):
        sink = MemorySink()
        sink.end()
        outcomes = []
        sink.subscribe_outcome(outcomes.append)
        assert len(outcomes) == 1

    def test_push_after_end_ignored(self):
        sink = MemorySink()
        sink.end()
        sink.push(b"late")
        assert sink.blobs == []

    def test_progress(self):
        sink = MemorySink(fps=4)
        marks = []
        sink.subscribe_progress(lambda p: marks.append(p.timemark))
        for _ in range(6):
            sink.push(b"x")
        assert marks[-1] == "00:00:01.50"
