"""Configuration and startup checks."""
