import logging

from .data_structures.result_structures import AccessRecord, Operation

logger = logging.getLogger(__name__)

OPERATIONS = {
    "R": Operation.LOAD,
    "L": Operation.LOAD,
    "W": Operation.STORE,
    "S": Operation.STORE,
}


def hex_to_int(hex_string):
    return int(hex_string, 16)


class TraceParser:
    """
    Parses a trace file and yields AccessRecords. Lines look like "R:1f40" or "W:0x7ffc";
    anything malformed is skipped with a warning.
    """
    def __init__(self, trace_file=None, addr_bits=64, lines=None):
        if (trace_file is None) == (lines is None):
            raise ValueError("Give either a trace file or trace lines.")
        self.addr_bits = addr_bits
        self.trace_file = trace_file
        if lines is None:
            with open(trace_file, 'r') as f:
                lines = f.readlines()
        self.lines = list(lines)
        self._mask = (1 << self.addr_bits) - 1

    @classmethod
    def from_lines(cls, lines, addr_bits=64):
        return cls(addr_bits=addr_bits, lines=lines)

    def parse_line(self, line):
        """
        Parse a single trace line
        :param line: str
        :return: AccessRecord, or None if the line is blank or malformed
        """
        line = line.strip()
        if not line:
            return None
        parts = line.split(":")
        if len(parts) < 2:
            logger.warning("Invalid trace line: %s", line)
            return None
        operation = OPERATIONS.get(parts[0].strip().upper())
        if operation is None:
            logger.warning("Unknown operation in trace line: %s", line)
            return None
        try:
            address = hex_to_int(parts[1].strip())
        except ValueError:
            logger.warning("Invalid address in trace line: %s", line)
            return None
        if address < 0:
            logger.warning("Negative address in trace line: %s", line)
            return None
        return AccessRecord(operation, address & self._mask)

    def __iter__(self):
        # iterate over each line and yield relevant info
        for line in self.lines:
            record = self.parse_line(line)
            if record is not None:
                yield record
