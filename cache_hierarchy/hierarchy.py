import random

from .data_structures.mem_levels import CacheLevel, MainMemoryLevel
from .protocols import make_policy


class LevelSpec:
    """Construction parameters for one cache level."""
    def __init__(self, name, num_sets, associativity, block_size, latency, policy="LRU"):
        self.name = name
        self.num_sets = num_sets
        self.associativity = associativity
        self.block_size = block_size
        self.latency = latency
        self.policy = policy

    def __repr__(self):
        return (f"LevelSpec({self.name!r}, sets={self.num_sets}, ways={self.associativity}, "
                f"block={self.block_size}, latency={self.latency}, policy={self.policy!r})")


def build_hierarchy(level_specs, memory_name="MainMemory", memory_latency=100, seed=None):
    """
    Build a cache chain bottom-up, each level taking ownership of the one built before it
    :param level_specs: LevelSpec objects ordered closest to memory first
    :param memory_name: name of the terminal memory level
    :param memory_latency: fixed latency of the terminal memory level
    :param seed: seed for Random replacement policies, None for nondeterministic runs
    :return: the topmost level of the chain
    """
    # every level gets its own derived seed so no two policies share a stream
    seeder = random.Random(seed) if seed is not None else None
    level = MainMemoryLevel(memory_name, memory_latency)
    for spec in level_specs:
        level_seed = seeder.getrandbits(32) if seeder is not None else None
        policy = make_policy(spec.policy, spec.num_sets, spec.associativity, seed=level_seed)
        level = CacheLevel(spec.name, spec.num_sets, spec.associativity, spec.block_size, spec.latency,
                           policy, lower_level=level)
    return level


def iter_levels(top_level):
    """Yield every level of the chain, topmost first, memory last."""
    level = top_level
    while level is not None:
        yield level
        level = level.lower_level


def hierarchy_names(top_level):
    return [level.name for level in iter_levels(top_level)]
