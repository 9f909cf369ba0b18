"""Use cases built on top of core and tools."""
