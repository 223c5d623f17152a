"""Validation, configuration, certificate, casing and TypeScript generation helpers for Aurae clients."""

__version__ = "0.1.0"

__all__ = ["casing", "config", "tsgen", "validation", "x509"]