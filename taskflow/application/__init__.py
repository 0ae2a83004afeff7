"""Application layer: DTOs, ports (Protocols) and services."""
