import os
import tempfile
import unittest

from cache_hierarchy import AccessRecord, Operation
from cache_hierarchy.trace_parser import TraceParser


class TestTraceParser(unittest.TestCase):
    def test_parses_operations(self):
        parser = TraceParser.from_lines(["R:1f40", "W:0x7ffc", "l:10", "S:20"])
        self.assertEqual(list(parser), [
            AccessRecord(Operation.LOAD, 0x1f40),
            AccessRecord(Operation.STORE, 0x7ffc),
            AccessRecord(Operation.LOAD, 0x10),
            AccessRecord(Operation.STORE, 0x20),
        ])

    def test_skips_malformed_lines(self):
        lines = ["", "R:10", "garbage", "X:10", "W:zz", "W:-4", "W:20"]
        with self.assertLogs("cache_hierarchy.trace_parser", level="WARNING") as logs:
            records = list(TraceParser.from_lines(lines))
        self.assertEqual([r.address for r in records], [0x10, 0x20])
        self.assertEqual(len(logs.output), 4)

    def test_masks_address(self):
        parser = TraceParser.from_lines(["R:1ffff"], addr_bits=16)
        self.assertEqual(next(iter(parser)).address, 0xffff)

    def test_restartable(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "trace.txt")
            with open(path, "w") as f:
                f.write("R:0\nW:40\n")
            parser = TraceParser(path)
            self.assertEqual(list(parser), list(parser))
            self.assertEqual(len(list(parser)), 2)

    def test_needs_exactly_one_source(self):
        with self.assertRaises(ValueError):
            TraceParser()
        with self.assertRaises(ValueError):
            TraceParser("trace.txt", lines=["R:0"])
