"""HTTP API for sport events."""
