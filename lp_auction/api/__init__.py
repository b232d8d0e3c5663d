"""HTTP API for the auction engine."""
