"""HTTP API for monitor status and administration."""
