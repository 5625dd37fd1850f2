#! /usr/bin/env python3

import unittest

from algolib.ledger_algorand.command_builder import (
    prepare_chunks_from_account_id,
    prepare_chunks_from_path,
    serialize_path,
    split_chunks,
)

class TestSplitChunks(unittest.TestCase):
    def test_roundtrip(self):
        message = bytes(range(256)) * 3
        for size in [1, 7, 250, 255, 767, 768, 1000]:
            with self.subTest(size=size):
                chunks = split_chunks(message, size)
                self.assertEqual(b"".join(chunks), message)
                for chunk in chunks[:-1]:
                    self.assertEqual(len(chunk), size)
                self.assertTrue(1 <= len(chunks[-1]) <= size)

    def test_exact_multiple(self):
        chunks = split_chunks(b"\xaa" * 500, 250)
        self.assertEqual([len(c) for c in chunks], [250, 250])

    def test_empty(self):
        self.assertEqual(split_chunks(b"", 250), [b""])

    def test_bad_chunk_len(self):
        with self.assertRaises(ValueError):
            split_chunks(b"abc", 0)

class TestAccountIdChunks(unittest.TestCase):
    def test_account_zero_not_prefixed(self):
        chunks = prepare_chunks_from_account_id(0, b"test message!")
        self.assertEqual(chunks, [b"test message!"])

    def test_account_none_not_prefixed(self):
        chunks = prepare_chunks_from_account_id(None, b"test message!")
        self.assertEqual(chunks, [b"test message!"])

    def test_account_prefixed(self):
        chunks = prepare_chunks_from_account_id(1, b"test message!")
        self.assertEqual(len(chunks), 1)
        self.assertEqual(len(chunks[0]), 17)
        self.assertEqual(chunks[0], b"\x00\x00\x00\x01test message!")

    def test_account_big_endian(self):
        chunks = prepare_chunks_from_account_id(0x01020304, b"")
        self.assertEqual(chunks, [b"\x01\x02\x03\x04"])

    def test_prefix_is_split_with_message(self):
        message = b"\x55" * 600
        chunks = prepare_chunks_from_account_id(7, message)
        self.assertEqual([len(c) for c in chunks], [250, 250, 104])
        self.assertEqual(b"".join(chunks), (7).to_bytes(4, "big") + message)

    def test_large_message(self):
        chunks = prepare_chunks_from_account_id(0, b"\x01" * 600)
        self.assertEqual([len(c) for c in chunks], [250, 250, 100])

    def test_str_message(self):
        self.assertEqual(prepare_chunks_from_account_id(0, "héllo"), ["héllo".encode()])

    def test_empty_message(self):
        self.assertEqual(prepare_chunks_from_account_id(0, b""), [b""])

    def test_account_out_of_range(self):
        for account_id in [-1, 1 << 32]:
            with self.subTest(account_id=account_id):
                with self.assertRaises(ValueError):
                    prepare_chunks_from_account_id(account_id, b"msg")

class TestPathChunks(unittest.TestCase):
    def test_path_is_sent_alone(self):
        path = serialize_path("m/44'/283'/0'/0/0")
        message = b"\x02" * 260
        chunks = prepare_chunks_from_path(path, message)
        self.assertEqual(chunks[0], path)
        self.assertEqual([len(c) for c in chunks[1:]], [250, 10])
        self.assertEqual(b"".join(chunks[1:]), message)

    def test_small_message(self):
        chunks = prepare_chunks_from_path(b"PATH", b"abc", 250)
        self.assertEqual(chunks, [b"PATH", b"abc"])

class TestSerializePath(unittest.TestCase):
    def test_default_path(self):
        expected = b"".join(i.to_bytes(4, "little") for i in [0x8000002c, 0x8000011b, 0x80000000, 0, 0])
        self.assertEqual(serialize_path("m/44'/283'/0'/0/0"), expected)

    def test_h_hardened(self):
        self.assertEqual(serialize_path("m/44h/283h/0h/0/5"), serialize_path("m/44'/283'/0'/0/5"))

    def test_any_length(self):
        self.assertEqual(serialize_path("m/1/2", required_lengths=()), b"\x01\x00\x00\x00\x02\x00\x00\x00")

    def test_invalid(self):
        for path in ["44'/283'/0'/0/0", "m/44'/283'/0'/0", "m/44'/abc'/0'/0/0", "m/44'/283'/0'/0/2147483648", "m/44'/283'//0/0"]:
            with self.subTest(path=path):
                with self.assertRaises(ValueError):
                    serialize_path(path)

if __name__ == "__main__":
    unittest.main()
