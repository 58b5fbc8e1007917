"""Application layer: DTOs, ports and services (use cases)."""
