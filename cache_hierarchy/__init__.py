from .data_structures import (AccessLine, AccessRecord, AccessResult, CacheLevel, CacheLine, MainMemoryLevel,
                              MemoryLevel, Operation)
from .protocols import ReplacementPolicy, LRUPolicy, FIFOPolicy, RandomPolicy, make_policy
from .hierarchy import LevelSpec, build_hierarchy, iter_levels, hierarchy_names
from .simulator import MemoryHierarchySimulator, SimulationRun
from .stats import StatsRow, aggregate_stats, stats_report, access_log, format_stats, format_access_log

__all__ = ["AccessLine", "AccessRecord", "AccessResult", "CacheLevel", "CacheLine", "MainMemoryLevel",
           "MemoryLevel", "Operation", "ReplacementPolicy", "LRUPolicy", "FIFOPolicy", "RandomPolicy",
           "make_policy", "LevelSpec", "build_hierarchy", "iter_levels", "hierarchy_names",
           "MemoryHierarchySimulator", "SimulationRun", "StatsRow", "aggregate_stats", "stats_report",
           "access_log", "format_stats", "format_access_log"]
