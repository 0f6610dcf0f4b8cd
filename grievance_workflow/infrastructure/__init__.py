"""Infrastructure layer: in-memory adapters, clock and observability."""
