"""Pydantic models shared by the walker, the facade and the CLI."""
