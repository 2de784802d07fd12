"""HTTP and WebSocket transport for running games."""
