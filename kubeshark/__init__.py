"""Helpers for the client side of an API traffic analyzer running in Kubernetes."""

__version__ = "0.1.0"