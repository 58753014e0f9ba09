"""Minecraft Java Edition server status query: wire fields, packets, status JSON and a command."""

__version__ = "0.1.0"