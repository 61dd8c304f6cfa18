"""Pydantic parameter models for the GitHub tools."""
