import logging

from .data_structures.result_structures import Operation
from .hierarchy import LevelSpec, build_hierarchy, hierarchy_names, iter_levels

logger = logging.getLogger(__name__)


class SimulationRun:
    """Addresses and results of one pass over a trace, index i of each belongs to record i."""
    def __init__(self, addresses, results, hierarchy):
        self.addresses = addresses
        self.results = results
        self.hierarchy = hierarchy

    def __len__(self):
        return len(self.results)


class MemoryHierarchySimulator:
    """Drives a trace through the topmost level of a cache hierarchy."""
    def __init__(self, top_level):
        self.top_level = top_level
        self.reads = 0
        self.writes = 0

    @classmethod
    def from_config(cls, config, seed=None):
        """
        Build the hierarchy described by a configuration
        :param config: HierarchyConfig, cache levels listed closest to the processor first
        :param seed: seed for Random replacement policies, falls back to the config's seed
        :return: MemoryHierarchySimulator
        """
        specs = [LevelSpec(c.name, c.num_sets, c.associativity, c.line_size, c.latency, c.policy)
                 for c in reversed(config.caches)]
        if seed is None:
            seed = config.memory.seed
        top_level = build_hierarchy(specs, config.memory.name, config.memory.latency, seed=seed)
        return cls(top_level)

    @property
    def hierarchy(self):
        return hierarchy_names(self.top_level)

    def access(self, record):
        if record.operation is Operation.LOAD:
            self.reads += 1
            return self.top_level.load(record.address)
        elif record.operation is Operation.STORE:
            self.writes += 1
            return self.top_level.store(record.address)
        else:
            raise ValueError(f"Unknown op: {record.operation}")

    def simulate(self, records):
        """
        Core simulator functionality, applies each record to the top level strictly in order.
        :param records: iterable of AccessRecord
        :return: list of AccessResult, one per record
        """
        return [self.access(record) for record in records]

    def run(self, records):
        addresses = []
        results = []
        for record in records:
            addresses.append(record.address)
            results.append(self.access(record))
        logger.info("Simulated %d accesses (%d reads, %d writes)", len(results), self.reads, self.writes)
        return SimulationRun(addresses, results, self.hierarchy)

    def get_stats(self):
        """
        Gathers and returns stats from all levels of the memory hierarchy.
        :return: dict of stats
        """
        stats = dict()
        for level in iter_levels(self.top_level):
            stats[level.name] = level.get_stats()
        stats["reads"] = self.reads
        stats["writes"] = self.writes
        stats["read ratio"] = self.reads / (self.reads + self.writes) if (self.reads + self.writes) > 0 else 0
        return stats
