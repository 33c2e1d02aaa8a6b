"""Business operations behind the HTTP routes."""
