"""PROMSYS: project road map and monitoring system (API service + dashboard client)."""

__version__ = "0.1.0"
