import logging

from .level_core import MemoryLevel
from ..result_structures import AccessResult
from ...protocols import ReplacementPolicy, make_policy

logger = logging.getLogger(__name__)


class CacheLine:
    """
    Represents a single way of a cache set.
    """
    def __init__(self):
        self.valid = False
        self.dirty = False
        self.tag = 0

    def mark_dirty(self):
        """
        Marks the cache line as dirty.
        :return: None
        """
        self.dirty = True

    def __str__(self):
        return f"CacheLine(valid={self.valid}, dirty={self.dirty}, tag={self.tag})"


class CacheLevel(MemoryLevel):
    """
    A set associative, write-back, write-allocate cache. Owns the level below it and its
    replacement policy; misses and dirty evictions are forwarded down the chain.
    """
    def __init__(self, name, num_sets, associativity, block_size, hit_latency, policy, lower_level):
        if num_sets < 1:
            raise ValueError(f"{name} number of sets must be positive.")
        if associativity < 1:
            raise ValueError(f"{name} associativity must be positive.")
        if block_size < 1:
            raise ValueError(f"{name} line size must be positive.")
        if hit_latency < 0:
            raise ValueError(f"{name} hit latency must not be negative.")
        if lower_level is None:
            raise ValueError(f"{name} needs a lower level to forward misses to.")
        super().__init__(name, lower_level)
        self.num_sets = num_sets
        self.associativity = associativity
        self.block_size = block_size
        self.hit_latency = hit_latency

        # storage and policy
        self.sets = [[CacheLine() for _ in range(associativity)] for _ in range(num_sets)]
        if not isinstance(policy, ReplacementPolicy):
            policy = make_policy(policy, num_sets, associativity)
        elif policy.num_sets != num_sets or policy.associativity != associativity:
            raise ValueError(f"{name} replacement policy is sized for {policy.num_sets} sets of "
                             f"{policy.associativity} ways, cache has {num_sets} sets of {associativity} ways.")
        self.policy = policy

        # stats
        self.hits = 0
        self.misses = 0
        self.evictions = 0
        self.replacements = 0

    def parse_address(self, address):
        """
        Split an address into its set index and tag
        :param address: non-negative int
        :return: integer set index and tag
        """
        if address < 0:
            raise ValueError(f"Address must not be negative: {address}")
        set_index = (address // self.block_size) % self.num_sets
        tag = address // (self.block_size * self.num_sets)
        return set_index, tag

    def _find_way(self, set_index, tag):
        for way, line in enumerate(self.sets[set_index]):
            if line.valid and line.tag == tag:
                return way
        return None

    def load(self, address):
        set_index, tag = self.parse_address(address)
        way = self._find_way(set_index, tag)
        if way is not None:
            self.hits += 1
            self.policy.on_hit(set_index, way)
            return AccessResult(self.name, self.hit_latency)

        self.misses += 1
        logger.debug("%s load miss 0x%x (set %d, tag 0x%x)", self.name, address, set_index, tag)
        result = self.lower_level.load(address)
        result.latency += self.hit_latency
        self._fill(set_index, tag)
        return result

    def store(self, address):
        set_index, tag = self.parse_address(address)
        way = self._find_way(set_index, tag)
        if way is not None:
            self.hits += 1
            self.sets[set_index][way].mark_dirty()
            self.policy.on_hit(set_index, way)
            return AccessResult(self.name, self.hit_latency)

        # write allocate: read the block in, then dirty it
        self.misses += 1
        logger.debug("%s store miss 0x%x (set %d, tag 0x%x)", self.name, address, set_index, tag)
        result = self.lower_level.load(address)
        result.latency += self.hit_latency
        way = self._fill(set_index, tag)
        self.sets[set_index][way].mark_dirty()
        return result

    def _fill(self, set_index, tag):
        """
        Install a tag into the set, evicting a victim if every way is valid
        :param set_index: int
        :param tag: int
        :return: the way the tag was installed into
        """
        lines = self.sets[set_index]
        way = next((i for i, line in enumerate(lines) if not line.valid), None)

        if way is None:
            way = self.policy.get_victim(set_index)
            victim = lines[way]
            self.replacements += 1
            if victim.valid and victim.dirty:
                evict_address = (victim.tag * self.num_sets + set_index) * self.block_size
                logger.debug("%s writing back dirty block 0x%x", self.name, evict_address)
                self.lower_level.store(evict_address)
                self.evictions += 1

        line = lines[way]
        line.valid = True
        line.tag = tag
        line.dirty = False
        self.policy.on_fill(set_index, way)
        return way

    def contains(self, address):
        """
        Check if the block holding this address is cached, without touching policy state
        :param address: int
        :return: bool
        """
        set_index, tag = self.parse_address(address)
        return self._find_way(set_index, tag) is not None

    def is_dirty(self, address):
        """
        Check if the cached block holding this address is dirty
        :param address: int
        :return: bool, or None if the block is not cached
        """
        set_index, tag = self.parse_address(address)
        way = self._find_way(set_index, tag)
        if way is None:
            return None
        return self.sets[set_index][way].dirty

    def valid_lines(self, set_index):
        return [line for line in self.sets[set_index] if line.valid]

    def get_stats(self):
        """
        Get cache stats
        :return: dict of stats
        """
        accesses = self.hits + self.misses
        return {"hits": self.hits,
                "misses": self.misses,
                "evictions": self.evictions,
                "hit rate": self.hits / accesses if accesses > 0 else 0}

    def __str__(self):
        return f"Cache {self.name}: Hits={self.hits}, Misses={self.misses}, Evictions={self.evictions}"
