"""Sport event lifecycle tracking with real-time status notifications."""

__version__ = "0.1.0"
