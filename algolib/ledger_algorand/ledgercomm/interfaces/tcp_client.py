"""ledgercomm.interfaces.tcp_client module."""

import socket

from .comm import Comm
from ..log import LOG


class TCPClient(Comm):
    """TCPClient class.

    Mainly used to connect to the TCP server of the Speculos emulator.
    Requests are prefixed with their 4-byte big-endian length; responses carry
    the length of the data, the data, then the 2-byte status word.

    Parameters
    ----------
    server : str
        IP address of the TCP server.
    port : int
        Port of the TCP server.

    """

    def __init__(self, server: str, port: int) -> None:
        self.server: str = server
        self.port: int = port
        self.socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self.__opened: bool = False

    def open(self) -> None:
        if not self.__opened:
            self.socket.connect((self.server, self.port))
            self.__opened = True

    def send(self, data: bytes) -> int:
        if not data:
            raise ValueError("Can't send empty data!")

        LOG.debug("=> %s", data.hex())
        data_len: bytes = len(data).to_bytes(4, byteorder="big")

        self.socket.sendall(data_len + data)
        return len(data_len) + len(data)

    def _recv_exactly(self, size: int) -> bytes:
        buf = b""
        while len(buf) < size:
            part = self.socket.recv(size - len(buf))
            if not part:
                raise ConnectionError("Connection closed by the TCP server")
            buf += part
        return buf

    def recv(self) -> bytes:
        """Blocking read of one response, status word included."""
        length: int = int.from_bytes(self._recv_exactly(4), byteorder="big")
        rdata: bytes = self._recv_exactly(length)
        sw: bytes = self._recv_exactly(2)

        LOG.debug("<= %s %s", rdata.hex(), sw.hex())

        return rdata + sw

    def close(self) -> None:
        self.socket.close()
        self.__opened = False
