import unittest

from cache_hierarchy import (AccessResult, CacheLevel, LevelSpec, MainMemoryLevel, RandomPolicy, build_hierarchy,
                             hierarchy_names, iter_levels)

# bottom-up, closest to memory first
THREE_LEVEL = [
    LevelSpec("L3", 8192, 16, 64, 20, "LRU"),
    LevelSpec("L2", 512, 8, 64, 10, "LRU"),
    LevelSpec("L1", 64, 8, 64, 4, "LRU"),
]


class TestBuildHierarchy(unittest.TestCase):
    def setUp(self):
        self.top = build_hierarchy(THREE_LEVEL, "MainMemory", 232)

    def test_topology(self):
        self.assertEqual(hierarchy_names(self.top), ["L1", "L2", "L3", "MainMemory"])
        levels = list(iter_levels(self.top))
        self.assertIsInstance(levels[-1], MainMemoryLevel)
        for upper, lower in zip(levels, levels[1:]):
            self.assertIs(upper.lower_level, lower)

    def test_cold_access_pays_every_level(self):
        self.assertEqual(self.top.load(0x12345678), AccessResult("MainMemory", 4 + 10 + 20 + 232))

    def test_latency_additivity(self):
        self.top.load(0x0)
        self.assertEqual(self.top.load(0x0), AccessResult("L1", 4))
        # 64 sets * 64 bytes apart maps to L1 set 0; 9 such blocks overflow the 8 ways
        stride = 64 * 64
        for i in range(1, 9):
            self.top.load(i * stride)
        self.assertFalse(self.top.contains(0x0))
        self.assertEqual(self.top.load(0x0), AccessResult("L2", 4 + 10))

    def test_store_miss_hits_lower_level(self):
        self.top.load(0x40)
        l1, l2 = list(iter_levels(self.top))[:2]
        stride = 64 * 64
        for i in range(1, 9):
            self.top.load(0x40 + i * stride)
        self.assertEqual(self.top.store(0x40), AccessResult("L2", 14))
        self.assertTrue(l1.is_dirty(0x40))
        self.assertFalse(l2.is_dirty(0x40))

    def test_empty_chain_is_memory(self):
        top = build_hierarchy([], "DRAM", 50)
        self.assertIsInstance(top, MainMemoryLevel)
        self.assertEqual(top.load(0), AccessResult("DRAM", 50))

    def test_bad_level_rejected_at_construction(self):
        with self.assertRaises(ValueError):
            build_hierarchy([LevelSpec("L1", 0, 1, 64, 1)])


class TestSeededHierarchy(unittest.TestCase):
    specs = [LevelSpec("L2", 1, 4, 16, 10, "Random"), LevelSpec("L1", 1, 2, 16, 1, "Random")]

    def _run(self, seed):
        top = build_hierarchy(self.specs, seed=seed)
        return [top.load(16 * (i % 7)) for i in range(200)]

    def test_same_seed_same_results(self):
        self.assertEqual(self._run(5), self._run(5))

    def test_levels_get_own_policies(self):
        top = build_hierarchy(self.specs, seed=5)
        l1, l2 = list(iter_levels(top))[:2]
        self.assertIsInstance(l1.policy, RandomPolicy)
        self.assertIsNot(l1.policy, l2.policy)
        self.assertIsNot(l1.policy.rng, l2.policy.rng)
        self.assertIsInstance(l1, CacheLevel)
