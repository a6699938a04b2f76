"""Configuration, logging and security primitives."""
