"""Application layer: placement sessions."""
