import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from infrakit.persistence.singleflight import SingleFlight


def test_do_returns_result():
    group = SingleFlight()
    assert group.do("k", lambda: "value") == "value"


def test_do_propagates_error_and_next_call_runs_again():
    group = SingleFlight()

    def fail():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        group.do("k", fail)
    assert group.do("k", lambda: 5) == 5


def test_concurrent_calls_share_one_run():
    group = SingleFlight()
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow():
        calls.append(1)
        started.set()
        release.wait(5)
        return "shared"

    with ThreadPoolExecutor(max_workers=2) as pool:
        leader = pool.submit(group.do, "k", slow)
        started.wait(5)
        follower = pool.submit(group.do, "k", slow)
        time.sleep(0.2)
        release.set()
        assert leader.result(5) == "shared"
        assert follower.result(5) == "shared"
    assert len(calls) == 1


def test_different_keys_run_separately():
    group = SingleFlight()
    assert group.do("a", lambda: 1) == 1
    assert group.do("b", lambda: 2) == 2


def test_forget_lets_new_call_run():
    group = SingleFlight()
    started = threading.Event()
    release = threading.Event()

    def slow():
        started.set()
        release.wait(5)
        return "first"

    results = []
    leader = threading.Thread(target=lambda: results.append(group.do("k", slow)))
    leader.start()
    started.wait(5)
    group.forget("k")
    assert group.do("k", lambda: "second") == "second"
    release.set()
    leader.join(5)
    assert results == ["first"]