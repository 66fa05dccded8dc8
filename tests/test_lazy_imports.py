"""
延遲載入與依賴檢查測試
"""

import threading

import pytest

from polyseg.core.exceptions import StrategyUnavailableError
from polyseg.utils import lazy_imports
from polyseg.utils.lazy_imports import LazyResource


class TestLazyResource:
    def test_initializes_once(self):
        calls = []

        def factory():
            calls.append(1)
            return object()

        resource = LazyResource("thing", factory)
        assert not resource.is_initialized()
        assert resource.get() is resource.get()
        assert calls == [1]
        assert resource.is_initialized()
        assert resource.init_seconds is not None

    def test_concurrent_first_use(self):
        calls = []
        barrier = threading.Barrier(8)

        def factory():
            calls.append(1)
            return "tagger"

        resource = LazyResource("thing", factory)
        results = []

        def worker():
            barrier.wait()
            results.append(resource.get())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == ["tagger"] * 8
        assert calls == [1]

    def test_failure_is_remembered(self):
        calls = []

        def factory():
            calls.append(1)
            raise ImportError("No module named 'fugashi'")

        resource = LazyResource("fugashi", factory, install_hint="pip install polyseg[ja]")
        for _ in range(3):
            with pytest.raises(StrategyUnavailableError) as excinfo:
                resource.get()
        assert calls == [1]
        assert resource.failed
        assert excinfo.value.resource == "fugashi"
        assert "pip install" in str(excinfo.value)

    def test_reset(self):
        resource = LazyResource("thing", object)
        resource.get()
        resource.reset()
        assert not resource.is_initialized()
        assert "pending" in repr(resource)


class TestDependencyChecks:
    def test_missing_dependencies(self, monkeypatch):
        monkeypatch.setattr(lazy_imports.importlib.util, "find_spec", lambda name: None)
        assert not lazy_imports.is_japanese_available()
        assert not lazy_imports.is_chinese_available()
        with pytest.raises(StrategyUnavailableError):
            lazy_imports.check_japanese_dependencies()
        with pytest.raises(StrategyUnavailableError) as excinfo:
            lazy_imports.check_chinese_dependencies()
        assert excinfo.value.install_hint == lazy_imports.CHINESE_INSTALL_HINT

    def test_unavailable_is_an_import_error(self):
        assert issubclass(StrategyUnavailableError, ImportError)
