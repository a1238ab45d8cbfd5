"""Domain models: value objects shared across layers."""
