"""Application layer: ports and use cases orchestrating event delivery."""
