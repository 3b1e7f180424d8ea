from enum import Enum


class Operation(Enum):
    LOAD = "Load"
    STORE = "Store"


class AccessRecord:
    """
    A single entry of a trace, an operation applied to an address
    """
    def __init__(self, operation, address):
        self.operation = operation
        self.address = address

    def __eq__(self, other):
        if not isinstance(other, AccessRecord):
            return NotImplemented
        return self.operation == other.operation and self.address == other.address

    def __repr__(self):
        return f"AccessRecord({self.operation.value}, 0x{self.address:x})"


class AccessResult:
    """
    Result of one load/store into a memory level. level is the name of the level that
    satisfied the access, latency accumulates as the call unwinds through the chain.
    """
    def __init__(self, level, latency):
        self.level = level
        self.latency = latency

    def __eq__(self, other):
        if not isinstance(other, AccessResult):
            return NotImplemented
        return self.level == other.level and self.latency == other.latency

    def __repr__(self):
        return f"AccessResult(level={self.level!r}, latency={self.latency})"


class AccessLine:
    """
    Class to encapsulate all the info about a single memory access for logging purposes
    """
    def __init__(self, index, address, result):
        self.index = index
        self.address = int(address)
        self.level = result.level
        self.latency = result.latency

    def as_dict(self):
        return {"index": self.index, "address": self.address, "level": self.level, "latency": self.latency}

    def __str__(self):
        return f"Access[{self.index:>4}] Addr=0x{self.address:08x} Hit={self.level:<15} Cyc={self.latency:>6}"
