"""Ingestion, validation and reprocessing core for NACH clearing batch files."""

__version__ = "0.1.0"
