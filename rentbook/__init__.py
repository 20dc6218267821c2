"""Rentbook: tenants, monthly rent tracking and a notice board behind a REST API."""

__version__ = "0.1.0"
