"""Client framework for the Software Challenge game server, with Hive and Blokus game logic."""

__version__ = "0.1.0"