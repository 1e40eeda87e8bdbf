"""Adapters for configuration, outbound HTTP, formatting and the web surface."""
