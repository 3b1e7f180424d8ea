from .level_core import MemoryLevel
from .cache_level import CacheLevel, CacheLine
from .main_mem_level import MainMemoryLevel

__all__ = ["MemoryLevel", "CacheLevel", "CacheLine", "MainMemoryLevel"]
