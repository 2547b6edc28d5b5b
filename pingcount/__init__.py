"""Per-client request counter service."""
