from __future__ import annotations

import threading
import time

import pytest

from crpt_client.infra.permit_pool import PermitPool
from crpt_client.infra.replenisher import Replenisher


def test_tick_restores_pool_to_capacity():
    pool = PermitPool(4)
    for _ in range(3):
        pool.acquire()
    r = Replenisher(pool, window_seconds=60.0)
    assert r.tick() == 3
    assert pool.available == 4


def test_tick_on_full_pool_adds_nothing():
    pool = PermitPool(4)
    r = Replenisher(pool, window_seconds=60.0)
    assert r.tick() == 0
    assert pool.available == 4


def test_background_thread_refills_once_per_window():
    pool = PermitPool(3)
    r = Replenisher(pool, window_seconds=0.2)
    r.start()
    try:
        for _ in range(3):
            pool.acquire()
        assert pool.available == 0

        start = time.monotonic()
        pool.acquire()  # blocks until the first tick
        elapsed = time.monotonic() - start
        assert elapsed < 0.5
        assert pool.available == 2
    finally:
        r.stop()


def test_stop_ends_thread_without_a_final_tick():
    pool = PermitPool(2)
    r = Replenisher(pool, window_seconds=0.2)
    r.start()
    assert r.is_running

    pool.acquire()
    pool.acquire()
    r.stop(timeout=2.0)
    assert not r.is_running

    time.sleep(0.3)
    assert pool.available == 0


def test_stop_interrupts_a_long_window_promptly():
    r = Replenisher(PermitPool(1), window_seconds=3600.0)
    r.start()
    start = time.monotonic()
    r.stop(timeout=2.0)
    assert time.monotonic() - start < 1.0
    assert not r.is_running


def test_stop_is_idempotent_and_safe_before_start():
    r = Replenisher(PermitPool(1), window_seconds=1.0)
    r.stop()
    r.stop()
    assert not r.is_running


def test_start_twice_raises():
    r = Replenisher(PermitPool(1), window_seconds=3600.0)
    r.start()
    try:
        with pytest.raises(RuntimeError):
            r.start()
    finally:
        r.stop()


def test_thread_is_a_named_daemon():
    r = Replenisher(PermitPool(1), window_seconds=3600.0)
    r.start()
    try:
        threads = [t for t in threading.enumerate() if t.name == "crpt-replenisher"]
        assert threads
        assert all(t.daemon for t in threads)
    finally:
        r.stop()
