"""Unit tests for SingletonCache."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from grafter.application.singleton_cache import SingletonCache
from grafter.domain import ISingletonCache


class TestSingletonCache:
    """Test cases for SingletonCache."""

    def test_cache_implements_interface(self):
        """Test that SingletonCache implements ISingletonCache."""
        assert isinstance(SingletonCache(), ISingletonCache)

    def test_empty_cache(self):
        """Test a fresh cache."""
        cache = SingletonCache()

        class Engine:
            pass

        assert len(cache) == 0
        assert not cache.contains(Engine)
        assert cache.get(Engine) is None

    def test_get_or_create_builds_once(self):
        """Test that the factory only runs on the first request."""
        cache = SingletonCache()
        calls = []

        class Engine:
            pass

        def factory():
            calls.append(1)
            return Engine()

        first = cache.get_or_create(Engine, factory)
        second = cache.get_or_create(Engine, factory)

        assert first is second
        assert len(calls) == 1
        assert cache.contains(Engine)
        assert cache.get(Engine) is first

    def test_failed_factory_caches_nothing(self):
        """Test that a raising factory leaves no entry behind."""
        cache = SingletonCache()

        class Engine:
            pass

        def factory():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_create(Engine, factory)

        assert not cache.contains(Engine)
        assert isinstance(cache.get_or_create(Engine, Engine), Engine)

    def test_reentrant_creation(self):
        """Test that a factory may build another singleton through the same cache."""
        cache = SingletonCache()

        class Engine:
            pass

        class Car:
            def __init__(self, engine):
                self.engine = engine

        car = cache.get_or_create(Car, lambda: Car(cache.get_or_create(Engine, Engine)))

        assert car.engine is cache.get(Engine)
        assert len(cache) == 2

    def test_concurrent_creation_builds_once(self):
        """Test that concurrent callers share one instance."""
        cache = SingletonCache()
        lock = threading.Lock()
        built = []

        class Engine:
            def __init__(self):
                time.sleep(0.01)
                with lock:
                    built.append(self)

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: cache.get_or_create(Engine, Engine), range(16)))

        assert len(built) == 1
        assert all(result is built[0] for result in results)

    def test_unrelated_singleton_built_from_another_thread(self):
        """Test that building one type does not block another type in a different thread."""
        cache = SingletonCache()
        results = []

        class Inner:
            pass

        class Outer:
            def __init__(self):
                worker = threading.Thread(
                    target=lambda: results.append(cache.get_or_create(Inner, Inner)),
                    daemon=True,
                )
                worker.start()
                worker.join(timeout=5)
                self.finished = not worker.is_alive()

        outer = cache.get_or_create(Outer, Outer)

        assert outer.finished
        assert results == [cache.get(Inner)]

    def test_unrelated_singletons_build_in_parallel(self):
        """Test that two different types are constructed concurrently."""
        cache = SingletonCache()
        barrier = threading.Barrier(2, timeout=5)

        class Engine:
            def __init__(self):
                barrier.wait()

        class Radio:
            def __init__(self):
                barrier.wait()

        with ThreadPoolExecutor(max_workers=2) as executor:
            engine = executor.submit(cache.get_or_create, Engine, Engine)
            radio = executor.submit(cache.get_or_create, Radio, Radio)

            assert isinstance(engine.result(timeout=10), Engine)
            assert isinstance(radio.result(timeout=10), Radio)
        assert len(cache) == 2
