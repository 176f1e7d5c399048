"""
Configuration module for the room coordinator.

Settings are read from the environment (and a local .env file).
"""
