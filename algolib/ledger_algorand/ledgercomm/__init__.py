"""Physical transports to the device: HID or the Speculos TCP server."""

from .transport import Transport, TransportType

__all__ = ["Transport", "TransportType"]
