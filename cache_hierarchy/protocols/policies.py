from abc import abstractmethod, ABC
from collections import OrderedDict
import random


class ReplacementPolicy(ABC):
    """
    Abstract base class for replacement policies. One instance belongs to exactly one cache level
    and keeps per-set bookkeeping over way indices.
    """
    name = None

    def __init__(self, num_sets, associativity):
        if num_sets < 1:
            raise ValueError("Replacement policy number of sets must be positive.")
        if associativity < 1:
            raise ValueError("Replacement policy associativity must be positive.")
        self.num_sets = num_sets
        self.associativity = associativity

    @abstractmethod
    def on_hit(self, set_index, way):
        pass

    @abstractmethod
    def on_fill(self, set_index, way):
        pass

    @abstractmethod
    def get_victim(self, set_index):
        pass


class LRUPolicy(ReplacementPolicy):
    """
    Least recently used. Each set keeps its ways in an OrderedDict, oldest use first.
    """
    name = "LRU"

    def __init__(self, num_sets, associativity):
        super().__init__(num_sets, associativity)
        self.sets = [OrderedDict() for _ in range(self.num_sets)]

    def _touch(self, set_index, way):
        order = self.sets[set_index]
        order.pop(way, None)
        order[way] = True

    def on_hit(self, set_index, way):
        self._touch(set_index, way)

    def on_fill(self, set_index, way):
        self._touch(set_index, way)

    def get_victim(self, set_index):
        """
        Get the least recently used way of the set
        :param set_index: int
        :return: way index in [0, associativity)
        """
        order = self.sets[set_index]
        if not order:
            return 0
        return next(iter(order))


class FIFOPolicy(ReplacementPolicy):
    """
    First in, first out. Hits never change the eviction order.
    """
    name = "FIFO"

    def __init__(self, num_sets, associativity):
        super().__init__(num_sets, associativity)
        self.sets = [OrderedDict() for _ in range(self.num_sets)]

    def on_hit(self, set_index, way):
        pass

    def on_fill(self, set_index, way):
        # a refilled way counts as a fresh insertion
        order = self.sets[set_index]
        order.pop(way, None)
        order[way] = True

    def get_victim(self, set_index):
        order = self.sets[set_index]
        if not order:
            return 0
        return next(iter(order))


class RandomPolicy(ReplacementPolicy):
    """
    Uniform random victim selection, seeded through a private generator so runs can be replayed.
    """
    name = "Random"

    def __init__(self, num_sets, associativity, seed=None):
        super().__init__(num_sets, associativity)
        self.rng = random.Random(seed)

    def on_hit(self, set_index, way):
        pass

    def on_fill(self, set_index, way):
        pass

    def get_victim(self, set_index):
        return self.rng.randrange(self.associativity)


POLICIES = {
    "lru": LRUPolicy,
    "fifo": FIFOPolicy,
    "random": RandomPolicy,
}


def make_policy(kind, num_sets, associativity, seed=None):
    """
    Build a fresh replacement policy by name
    :param kind: "LRU", "FIFO" or "Random", case insensitive
    :param num_sets: int
    :param associativity: int
    :param seed: seed for the Random policy, ignored by the others
    :return: ReplacementPolicy instance
    """
    try:
        policy_cls = POLICIES[kind.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown replacement policy: {kind}") from None
    if policy_cls is RandomPolicy:
        return policy_cls(num_sets, associativity, seed=seed)
    return policy_cls(num_sets, associativity)
