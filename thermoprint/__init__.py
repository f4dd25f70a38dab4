"""Packet building, 1-bit drawing and text output for small Bluetooth thermal printers."""

__version__ = "0.1.0"