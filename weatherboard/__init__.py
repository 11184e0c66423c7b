"""A weather forecast dashboard server and a client for the Pirate Weather forecast API."""

__version__ = "0.1.0"