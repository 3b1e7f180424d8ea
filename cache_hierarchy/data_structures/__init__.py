from .mem_levels import *
from .result_structures import *

__all__ = ["MemoryLevel", "CacheLevel", "CacheLine", "MainMemoryLevel", "Operation", "AccessRecord",
           "AccessResult", "AccessLine"]
