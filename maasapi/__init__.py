"""Typed client for the MAAS (Metal as a Service) REST API."""

__version__ = "0.1.0"
