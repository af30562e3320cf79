import unittest
from unittest.mock import MagicMock

from briefy.agent.prompt_cache import GlobalPromptCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class GlobalPromptCacheTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = GlobalPromptCache(ttl_seconds=300, clock=self.clock)

    def test_loader_runs_once_within_ttl(self):
        loader = MagicMock(return_value={"pr": "Saúde"})

        self.assertEqual(self.cache.get(loader), {"pr": "Saúde"})
        self.clock.now = 299
        self.assertEqual(self.cache.get(loader), {"pr": "Saúde"})
        loader.assert_called_once()

    def test_entry_expires_after_ttl(self):
        loader = MagicMock(side_effect=[{"pr": "v1"}, {"pr": "v2"}])

        self.cache.get(loader)
        self.clock.now = 300

        self.assertIsNone(self.cache.peek())
        self.assertEqual(self.cache.get(loader), {"pr": "v2"})

    def test_invalidate_forces_a_reload(self):
        loader = MagicMock(side_effect=[{}, {"tasks": "novo"}])

        self.cache.get(loader)
        self.cache.invalidate()

        self.assertIsNone(self.cache.peek())
        self.assertEqual(self.cache.get(loader), {"tasks": "novo"})

    def test_returned_value_is_a_copy(self):
        value = self.cache.get(lambda: {"pr": "a"})
        value["pr"] = "mutated"

        self.assertEqual(self.cache.peek(), {"pr": "a"})

    def test_empty_overrides_are_cached_too(self):
        loader = MagicMock(return_value={})

        self.cache.get(loader)
        self.cache.get(loader)

        loader.assert_called_once()
