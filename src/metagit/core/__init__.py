"""Core infrastructure: git access, configuration, and context."""
