from .level_core import MemoryLevel
from ..result_structures import AccessResult


class MainMemoryLevel(MemoryLevel):
    """Bottom of the hierarchy, satisfies every access at a fixed latency."""
    def __init__(self, name="MainMemory", latency=100):
        super().__init__(name)
        if latency < 0:
            raise ValueError("Main memory latency must not be negative.")
        self.latency = latency
        self.reads = 0
        self.writes = 0

    def load(self, address):
        self.reads += 1
        return AccessResult(self.name, self.latency)

    def store(self, address):
        self.writes += 1
        return AccessResult(self.name, self.latency)

    def get_stats(self):
        total = self.reads + self.writes
        return {
            "mem_accesses": total,
            "mem_reads": self.reads,
            "mem_writes": self.writes,
        }
