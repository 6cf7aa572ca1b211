"""Compose executable GraphQL schemas from SDL, Strawberry types and base schemas."""

__version__ = "0.1.0"
