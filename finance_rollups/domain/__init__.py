"""Domain package for aggregation rules and core models."""
