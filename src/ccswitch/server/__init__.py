"""HTTP server for the cc-switch dashboard."""
