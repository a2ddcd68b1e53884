"""Core utilities shared by the API and services."""
