"""Request forms bound to JSON bodies."""
