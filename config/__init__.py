"""
Configuration module for the Watch Party client.

Settings are read from the environment (and a local .env file).
"""
