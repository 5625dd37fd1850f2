"""ledgercomm.comm module."""

from abc import ABCMeta, abstractmethod


class Comm(metaclass=ABCMeta):
    """Abstract class for communication interface.

    Responses are returned raw: response data followed by the 2-byte status word.
    """

    @abstractmethod
    def open(self) -> None:
        """Just open the interface."""
        raise NotImplementedError

    @abstractmethod
    def send(self, data: bytes) -> int:
        """Allow to send raw bytes from the interface."""
        raise NotImplementedError

    @abstractmethod
    def recv(self) -> bytes:
        """Allow to receive raw bytes from the interface."""
        raise NotImplementedError

    def exchange(self, data: bytes) -> bytes:
        """Send `data` and wait for the response (blocking IO)."""
        self.send(data)

        return self.recv()

    @abstractmethod
    def close(self) -> None:
        """Just close the interface."""
        raise NotImplementedError
