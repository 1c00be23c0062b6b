import progress
from progress import reset, set_attempt, set_done, set_result_url, set_tile_count, snapshot


def test_set_done_no_args_defaults_to_solved():
    reset()
    set_done()
    snap = snapshot()
    assert snap["status"] == "Solved"
    assert snap["percent"] == 100.0
    assert snap["done"] is True
    assert snap["ok"] is True
    assert snap["result_url"] == ""


def test_set_done_failure_keeps_reason():
    reset()
    set_done(False, reason="boom")
    snap = snapshot()
    assert snap["status"] == "Error"
    assert snap["message"] == "boom"
    assert snap["done"] is True
    assert snap["ok"] is False


def test_set_attempt_updates_percent():
    reset()
    set_attempt(5, 20, 1234)
    snap = snapshot()
    assert snap["attempt"] == 5
    assert snap["max_attempts"] == 20
    assert snap["iterations"] == 1234
    assert snap["percent"] == 25.0


def test_setters_tolerate_junk():
    reset()
    set_attempt("x", None)
    set_tile_count(None)
    snap = snapshot()
    assert snap["attempt"] == 0
    assert snap["tile_count"] == 0


def test_set_result_url_tracks_navigation_target():
    reset()
    set_result_url("/foo")
    snap = snapshot()
    assert snap["result_url"] == "/foo"
    assert snap["done"] is False


def test_reset_increments_run_identifier():
    reset()
    first = snapshot()["run_id"]
    reset()
    second = snapshot()["run_id"]
    assert second == first + 1


def test_snapshot_hides_internal_timer():
    reset()
    progress.start_timer()
    snap = snapshot()
    assert "elapsed_start" not in snap
    assert snap["elapsed_str"].endswith("s")


def test_log_lines_are_key_value_pairs(monkeypatch):
    lines = []

    class _Capture:
        handlers = [object()]

        def log(self, level, fmt, *args):
            lines.append(fmt % args)

    monkeypatch.setattr(progress, "ATTEMPT_LOGGER", _Capture())
    progress.log_attempt_detail("Attempt failed", attempt=2, result="exhausted", skipped=None)
    progress.log_attempt_detail("Run setup")
    assert lines == ["Attempt failed | attempt=2 result=exhausted", "Run setup"]
