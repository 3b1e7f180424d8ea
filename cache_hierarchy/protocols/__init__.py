from .policies import ReplacementPolicy, LRUPolicy, FIFOPolicy, RandomPolicy, make_policy

__all__ = ["ReplacementPolicy", "LRUPolicy", "FIFOPolicy", "RandomPolicy", "make_policy"]
