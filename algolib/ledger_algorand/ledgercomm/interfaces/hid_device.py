"""ledgercomm.interfaces.hid_device module."""

from typing import List, Optional

import hid

from .comm import Comm
from ..log import LOG

LEDGER_VENDOR_ID = 0x2C97

# Header: channel (0x0101), tag (0x05), sequence index (2 bytes)
CHANNEL = b"\x01\x01"
TAG_APDU = 0x05
REPORT_SIZE = 64


class HID(Comm):
    """HID class.

    Communicate with a Ledger device through USB. Every APDU is prefixed with
    its 2-byte length and split in 64-byte reports.

    Parameters
    ----------
    vendor_id: int
        Vendor ID of the device. Default to Ledger Vendor ID 0x2C97.
    hid_path : Optional[bytes]
        Path of the HID device. The first Ledger device found when not set.

    """

    def __init__(self, vendor_id: int = LEDGER_VENDOR_ID, hid_path: Optional[bytes] = None) -> None:
        self.device = hid.device()
        self.path: Optional[bytes] = hid_path
        self.__opened: bool = False
        self.vendor_id: int = vendor_id

    def open(self) -> None:
        if not self.__opened:
            if self.path is None:
                self.path = HID.enumerate_devices(self.vendor_id)[0]
            self.device.open_path(self.path)
            self.device.set_nonblocking(True)
            self.__opened = True

    @staticmethod
    def enumerate_devices(vendor_id: int = LEDGER_VENDOR_ID) -> List[bytes]:
        """Paths of the HID interfaces of connected Ledger devices."""
        devices: List[bytes] = []

        for hid_device in hid.enumerate(vendor_id, 0):
            if (hid_device.get("interface_number") == 0 or
                    # MacOS specific
                    hid_device.get("usage_page") == 0xffa0):
                devices.append(hid_device["path"])

        if not devices:
            raise OSError(f"Can't find Ledger device with vendor_id {hex(vendor_id)}")

        return devices

    def send(self, data: bytes) -> int:
        if not data:
            raise ValueError("Can't send empty data!")

        LOG.debug("=> %s", data.hex())

        data = len(data).to_bytes(2, byteorder="big") + data
        offset: int = 0
        seq_idx: int = 0
        length: int = 0

        while offset < len(data):
            header: bytes = CHANNEL + bytes([TAG_APDU]) + seq_idx.to_bytes(2, byteorder="big")
            data_chunk: bytes = header + data[offset:offset + REPORT_SIZE - len(header)]

            self.device.write(b"\x00" + data_chunk)
            length += len(data_chunk) + 1
            offset += REPORT_SIZE - len(header)
            seq_idx += 1

        return length

    def recv(self) -> bytes:
        """Blocking read of one response, status word included."""
        self.device.set_nonblocking(False)
        report: bytes = bytes(self.device.read(REPORT_SIZE + 1))
        self.device.set_nonblocking(True)

        if report[:2] != CHANNEL or report[2] != TAG_APDU or report[3:5] != b"\x00\x00":
            raise OSError(f"Unexpected HID report: {report.hex()}")

        data_len: int = int.from_bytes(report[5:7], byteorder="big")
        data: bytes = report[7:]

        while len(data) < data_len:
            report = bytes(self.device.read(REPORT_SIZE + 1, timeout_ms=1000))
            if not report:
                raise OSError("Timeout reading HID response")
            data += report[5:]

        raw: bytes = data[:data_len]

        LOG.debug("<= %s %s", raw[:-2].hex(), raw[-2:].hex())

        return raw

    def close(self) -> None:
        if self.__opened:
            self.device.close()
            self.__opened = False
