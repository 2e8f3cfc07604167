"""Domain types for publishing and staging applications."""
