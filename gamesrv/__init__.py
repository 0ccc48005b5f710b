"""Building blocks for a distributed game server: ids, crypto, Redis locks, HTTP and packet routing."""

__version__ = "0.1.0"