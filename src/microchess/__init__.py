"""MicroChess — a byte-exact port of the 1976 8-bit chess program's engine."""

__version__ = "0.1.0"
