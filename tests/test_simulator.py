import unittest

from cache_hierarchy import (AccessRecord, AccessResult, LevelSpec, MemoryHierarchySimulator, Operation,
                             build_hierarchy, iter_levels)
from cache_hierarchy.config import CacheConfig, HierarchyConfig, MemoryConfig


def loads(*addresses):
    return [AccessRecord(Operation.LOAD, a) for a in addresses]


class TestMemoryHierarchySimulator(unittest.TestCase):
    def setUp(self):
        top = build_hierarchy([LevelSpec("L2", 4, 2, 16, 10), LevelSpec("L1", 1, 1, 16, 1)], "Mem", 100)
        self.simulator = MemoryHierarchySimulator(top)

    def test_one_result_per_record_in_order(self):
        records = loads(0x00, 0x00, 0x10, 0x00)
        results = self.simulator.simulate(records)
        self.assertEqual(results, [
            AccessResult("Mem", 111),
            AccessResult("L1", 1),
            AccessResult("Mem", 111),
            AccessResult("L2", 11),
        ])

    def test_store_routed_to_store(self):
        self.simulator.simulate([AccessRecord(Operation.STORE, 0x20)])
        self.assertTrue(self.simulator.top_level.is_dirty(0x20))
        self.assertEqual((self.simulator.reads, self.simulator.writes), (0, 1))

    def test_dirty_eviction_reaches_next_level(self):
        records = [AccessRecord(Operation.STORE, 0x20)] + loads(0x30)
        self.simulator.simulate(records)
        l1, l2, mem = iter_levels(self.simulator.top_level)
        self.assertEqual(l1.evictions, 1)
        self.assertTrue(l2.is_dirty(0x20))
        self.assertEqual(mem.writes, 0)

    def test_unknown_operation(self):
        with self.assertRaises(ValueError):
            self.simulator.simulate([AccessRecord("Prefetch", 0)])

    def test_run_keeps_addresses(self):
        run = self.simulator.run(loads(0x10, 0x44))
        self.assertEqual(run.addresses, [0x10, 0x44])
        self.assertEqual(len(run), 2)
        self.assertEqual(run.hierarchy, ["L1", "L2", "Mem"])

    def test_get_stats(self):
        self.simulator.simulate(loads(0, 0) + [AccessRecord(Operation.STORE, 0)])
        stats = self.simulator.get_stats()
        self.assertEqual(stats["L1"]["hits"], 2)
        self.assertEqual(stats["Mem"]["mem_reads"], 1)
        self.assertAlmostEqual(stats["read ratio"], 2 / 3)


class TestFromConfig(unittest.TestCase):
    def test_levels_built_in_declared_order(self):
        config = HierarchyConfig(
            [CacheConfig("L1", 64, 8, 64, 4), CacheConfig("L2", 512, 8, 64, 10), CacheConfig("L3", 8192, 16, 64, 20)],
            MemoryConfig("MainMemory", 232),
        )
        simulator = MemoryHierarchySimulator.from_config(config)
        self.assertEqual(simulator.hierarchy, config.hierarchy)
        self.assertEqual(simulator.simulate(loads(0xabc0)), [AccessResult("MainMemory", 266)])

    def test_seed_taken_from_config(self):
        config = HierarchyConfig([CacheConfig("L1", 1, 4, 16, 1, "Random")], MemoryConfig(seed=9))
        trace = loads(*[16 * (i % 9) for i in range(100)])
        first = MemoryHierarchySimulator.from_config(config).simulate(trace)
        second = MemoryHierarchySimulator.from_config(config).simulate(trace)
        self.assertEqual(first, second)
