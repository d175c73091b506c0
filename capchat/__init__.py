"""Structured JSON logging with level events, a service startup skeleton and a log pretty-printer."""

__version__ = "0.1.0"