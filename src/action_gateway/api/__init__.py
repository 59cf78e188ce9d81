"""FastAPI wiring for the action gateway."""
