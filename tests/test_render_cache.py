"""Unit tests for the render cache generation discipline."""

from __future__ import annotations

import threading

from models.records import ChartDataset
from services.render_cache import RenderCache


def _dataset() -> ChartDataset:
    return ChartDataset(
        labels=["10:00:00"],
        series_inside=[20.0],
        series_outside=[20.0],
        series_humidity=[50.0],
    )


def test_empty_cache_misses() -> None:
    cache = RenderCache()

    assert cache.get() is None
    assert cache.generation == 0


def test_put_then_get_returns_entry() -> None:
    cache = RenderCache()
    dataset = _dataset()

    stored = cache.put("<html>", dataset, cache.generation)

    entry = cache.get()
    assert stored is True
    assert entry is not None
    assert entry.artifact == "<html>"
    assert entry.dataset is dataset


def test_invalidate_clears_entry_and_bumps_generation() -> None:
    cache = RenderCache()
    cache.put("<html>", _dataset(), cache.generation)

    generation = cache.invalidate()

    assert generation == 1
    assert cache.generation == 1
    assert cache.get() is None


def test_put_with_stale_generation_is_discarded() -> None:
    cache = RenderCache()
    started_at = cache.generation
    cache.invalidate()

    stored = cache.put("<stale>", _dataset(), started_at)

    assert stored is False
    assert cache.get() is None


def test_concurrent_puts_leave_a_whole_entry() -> None:
    cache = RenderCache()
    generation = cache.generation
    barrier = threading.Barrier(8)

    def worker(index: int) -> None:
        barrier.wait()
        cache.put(f"artifact-{index}", _dataset(), generation)

    threads = [threading.Thread(target=worker, args=(index,)) for index in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    entry = cache.get()
    assert entry is not None
    assert entry.artifact.startswith("artifact-")
    assert entry.generation == generation
