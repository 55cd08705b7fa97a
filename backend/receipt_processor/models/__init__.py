"""Pydantic schemas and enumerations."""
