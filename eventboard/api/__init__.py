"""FastAPI service for event persistence."""
