#! /usr/bin/env python3

import unittest

from fake_transport import FakeTransport, ok, status

from algolib.ledger_algorand.command_builder import DeviceProfile, InsType
from algolib.ledger_algorand.exception import ArbitrarySignError, DenyError, IncorrectDataError
from algolib.ledger_algorand.response import ARBITRARY_SIGN_TABLES, Success
from algolib.ledger_algorand.transfer import (
    ApduException,
    ChunkTransfer,
    FlagScheme,
    chunk_flags,
)

class TestChunkFlags(unittest.TestCase):
    def test_legacy(self):
        self.assertEqual([chunk_flags(FlagScheme.LEGACY, i, 4) for i in range(4)],
                         [(0x01, 0x80), (0x80, 0x80), (0x80, 0x80), (0x80, 0x00)])

    def test_legacy_single(self):
        self.assertEqual(chunk_flags(FlagScheme.LEGACY, 0, 1), (0x01, 0x00))

    def test_structured(self):
        self.assertEqual([chunk_flags(FlagScheme.STRUCTURED, i, 4) for i in range(4)],
                         [(0x00, 0), (0x01, 0), (0x01, 0), (0x02, 0)])

    def test_structured_shortest(self):
        self.assertEqual([chunk_flags(FlagScheme.STRUCTURED, i, 2) for i in range(2)], [(0x00, 0), (0x02, 0)])

    def test_structured_needs_payload(self):
        with self.assertRaises(ValueError):
            chunk_flags(FlagScheme.STRUCTURED, 0, 1)

    def test_index_out_of_range(self):
        with self.assertRaises(ValueError):
            chunk_flags(FlagScheme.LEGACY, 3, 3)

class TestChunkTransfer(unittest.TestCase):
    def test_legacy_sequence(self):
        transport = FakeTransport(ok(), ok(), ok(b"\x07" * 64))
        chunks = [b"a" * 250, b"b" * 250, b"c" * 100]
        result = ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run(chunks)

        self.assertEqual(result, b"\x07" * 64)
        self.assertEqual(transport.sent, [
            (0x80, InsType.SIGN_MSGPACK, 0x01, 0x80, chunks[0]),
            (0x80, InsType.SIGN_MSGPACK, 0x80, 0x80, chunks[1]),
            (0x80, InsType.SIGN_MSGPACK, 0x80, 0x00, chunks[2]),
        ])

    def test_only_last_payload_kept(self):
        transport = FakeTransport(ok(b"intermediate"), ok(b"final"))
        result = ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run([b"1", b"2"])
        self.assertEqual(result, b"final")

    def test_abort_on_error(self):
        transport = FakeTransport(ok(), status(0x6986), ok(b"sig"))
        with self.assertRaises(DenyError):
            ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run([b"1", b"2", b"3", b"4"])
        self.assertEqual(len(transport.sent), 2)

    def test_expected_failure_mid_transfer(self):
        transport = FakeTransport(status(0x6984), status(0x6a80), ok(b"sig"))
        result = ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run([b"1", b"2", b"3"])
        self.assertEqual(result, b"sig")
        self.assertEqual(len(transport.sent), 3)

    def test_expected_failure_on_last_chunk(self):
        transport = FakeTransport(ok(), status(0x6984))
        with self.assertRaises(IncorrectDataError) as cm:
            ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run([b"1", b"2"])
        self.assertEqual(cm.exception.sw, 0x6984)

    def test_structured_error_overrides(self):
        transport = FakeTransport(ok(), status(0x698b))
        transfer = ChunkTransfer(transport, InsType.SIGN_ARBITRARY, FlagScheme.STRUCTURED, ARBITRARY_SIGN_TABLES)
        with self.assertRaises(ArbitrarySignError) as cm:
            transfer.run([b"path", b"data", b"more"])
        self.assertEqual(cm.exception.message, "Missing Domain")
        self.assertEqual([s[2] for s in transport.sent], [0x00, 0x01])

    def test_apdu_exception_translated(self):
        class RaisingTransport(FakeTransport):
            def send(self, cla, ins, p1, p2, data=b""):
                super().send(cla, ins, p1, p2, data)
                raise ApduException(0x698f, b"")

        transport = RaisingTransport()
        transfer = ChunkTransfer(transport, InsType.SIGN_ARBITRARY, FlagScheme.STRUCTURED, ARBITRARY_SIGN_TABLES)
        with self.assertRaises(ArbitrarySignError) as cm:
            transfer.run([b"path", b"data"])
        self.assertEqual(cm.exception.message, "Failed HD Path")
        self.assertEqual(len(transport.sent), 1)

    def test_transport_error_passthrough(self):
        class BrokenTransport(FakeTransport):
            def send(self, cla, ins, p1, p2, data=b""):
                raise ConnectionError("unplugged")

        with self.assertRaises(ConnectionError):
            ChunkTransfer(BrokenTransport(), InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run([b"1"])

    def test_p1_override(self):
        transport = FakeTransport(ok(b"r"))
        transfer = ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY)
        outcome = transfer.send_chunk(0, 1, b"x", p1=0x00)
        self.assertEqual(outcome, Success(b"r"))
        self.assertEqual(transport.sent, [(0x80, InsType.SIGN_MSGPACK, 0x00, 0x00, b"x")])

    def test_profile_class_byte(self):
        transport = FakeTransport(ok())
        ChunkTransfer(transport, InsType.SIGN_MSGPACK, FlagScheme.LEGACY, profile=DeviceProfile(cla=0xe0)).run([b"x"])
        self.assertEqual(transport.sent[0][0], 0xe0)

    def test_empty_sequence(self):
        with self.assertRaises(ValueError):
            ChunkTransfer(FakeTransport(), InsType.SIGN_MSGPACK, FlagScheme.LEGACY).run([])

if __name__ == "__main__":
    unittest.main()
