"""HTTP API for the converter."""
