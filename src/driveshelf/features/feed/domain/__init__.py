"""Feed domain models."""
