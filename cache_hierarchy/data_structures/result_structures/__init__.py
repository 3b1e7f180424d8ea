from .access_results import Operation, AccessRecord, AccessResult, AccessLine

__all__ = ["Operation", "AccessRecord", "AccessResult", "AccessLine"]
