"""Application layer - Ports, DTOs, in-memory state and engine services."""
