"""ledgercomm.transport module."""

import enum
import logging
import struct
from typing import Optional, Union, cast

from .interfaces.comm import Comm
from .interfaces.tcp_client import TCPClient
from .log import LOG


class TransportType(enum.Enum):
    """Type of interface available."""

    HID = 1
    TCP = 2


class Transport:
    """Transport class to exchange APDUs.

    Allow to communicate using HID device such as Nano S/X or through TCP
    socket with the Speculos emulator.

    Parameters
    ----------
    interface : str
        Either "hid" or "tcp" for the underlying communication interface.
    server : str
        IP adress of the TCP server if interface is "tcp".
    port : int
        Port of the TCP server if interface is "tcp".
    hid_path : Optional[bytes]
        Path of the HID device if interface is "hid".
    debug : bool
        Whether you want debug logs or not.

    """

    def __init__(self,
                 interface: str = "tcp", # Literal["hid", "tcp"]
                 server: str = "127.0.0.1",
                 port: int = 9999,
                 hid_path: Optional[bytes] = None,
                 debug: bool = False) -> None:
        if debug:
            LOG.setLevel(logging.DEBUG)

        self.interface: TransportType

        try:
            self.interface = TransportType[interface.upper()]
        except KeyError as exc:
            raise ValueError(f"Unknown interface '{interface}'!") from exc

        self.com: Comm
        if self.interface == TransportType.TCP:
            self.com = TCPClient(server=server, port=port)
        else:
            # hidapi is only needed for real devices
            from .interfaces.hid_device import HID
            self.com = HID(hid_path=hid_path)

        try:
            self.com.open()
        except OSError:
            self.com.close()
            raise

    @staticmethod
    def apdu_header(cla: int,
                    ins: Union[int, enum.IntEnum],
                    p1: int = 0,
                    p2: int = 0,
                    lc: int = 0) -> bytes:
        """Pack the APDU header (CLA, INS, P1, P2, Lc) as bytes."""
        ins = cast(int, ins.value) if isinstance(ins, enum.IntEnum) else cast(int, ins)

        if lc > 0xFF:
            raise ValueError(f"APDU payload too long: {lc} bytes")

        return struct.pack("BBBBB", cla, ins, p1, p2, lc)

    def exchange(self,
                 cla: int,
                 ins: Union[int, enum.IntEnum],
                 p1: int = 0,
                 p2: int = 0,
                 cdata: bytes = b"") -> bytes:
        """Send structured APDUs and wait for the raw response (data + status word)."""
        header: bytes = Transport.apdu_header(cla, ins, p1, p2, len(cdata))

        return self.com.exchange(header + cdata)

    def exchange_raw(self, apdu: Union[str, bytes]) -> bytes:
        """Send raw bytes `apdu` (or its hexstring) and wait for the raw response."""
        if isinstance(apdu, str):
            apdu = bytes.fromhex(apdu)

        return self.com.exchange(apdu)

    def close(self) -> None:
        self.com.close()
