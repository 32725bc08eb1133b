"""Application layer wiring feature use cases for hosts."""
