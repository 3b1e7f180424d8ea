import logging
from collections import OrderedDict

from .data_structures.result_structures import AccessLine

logger = logging.getLogger(__name__)


class StatsRow:
    def __init__(self, hits=0, misses=0, total_latency=0):
        self.hits = hits
        self.misses = misses
        self.total_latency = total_latency

    @property
    def avg_hit_latency(self):
        return self.total_latency / self.hits if self.hits > 0 else 0

    def __eq__(self, other):
        if not isinstance(other, StatsRow):
            return NotImplemented
        return (self.hits, self.misses, self.total_latency) == (other.hits, other.misses, other.total_latency)

    def __repr__(self):
        return f"StatsRow(hits={self.hits}, misses={self.misses}, total_latency={self.total_latency})"


def aggregate_stats(results, hierarchy):
    """
    Attribute each access result to the declared hierarchy levels. The level that satisfied
    an access is credited a hit, every level declared above it a miss.
    :param results: iterable of AccessResult
    :param hierarchy: level names, closest to the processor first and memory last
    :return: OrderedDict mapping level name to StatsRow, in declared order
    """
    stats = OrderedDict((name, StatsRow()) for name in hierarchy)
    for index, result in enumerate(results):
        if result.level not in stats:
            logger.warning("Access %d hit level %s which is not in the hierarchy %s, skipping",
                           index, result.level, list(stats))
            continue
        for name, row in stats.items():
            if name == result.level:
                row.hits += 1
                row.total_latency += result.latency
                break
            row.misses += 1
    return stats


def stats_report(results, hierarchy):
    """
    Aggregated stats as plain rows
    :return: list of dicts with level, hits, misses and avg_hit_latency, in declared order
    """
    return [{"level": name, "hits": row.hits, "misses": row.misses, "avg_hit_latency": row.avg_hit_latency}
            for name, row in aggregate_stats(results, hierarchy).items()]


def access_log(results, addresses):
    """
    Per access detail
    :param results: AccessResult sequence
    :param addresses: addresses of the records that produced results, same order
    :return: list of AccessLine
    """
    results = list(results)
    addresses = list(addresses)
    if len(results) != len(addresses):
        raise ValueError(f"Got {len(results)} results for {len(addresses)} addresses.")
    return [AccessLine(i, address, result) for i, (address, result) in enumerate(zip(addresses, results))]


def format_stats(results, hierarchy):
    stat_str = "=== Simulation Results (Aggregated) ===\n"
    stat_str += f"{'Level':<15} {'Hits':>10} {'Misses':>10} {'Avg Latency (cyc)':>20}\n"
    for row in stats_report(results, hierarchy):
        stat_str += (f"{row['level']:<15} {row['hits']:>10} {row['misses']:>10} "
                     f"{row['avg_hit_latency']:>20.0f}\n")
    return stat_str


def format_access_log(results, addresses):
    log_str = "=== Detailed History ===\n"
    for line in access_log(results, addresses):
        log_str += str(line) + "\n"
    return log_str
