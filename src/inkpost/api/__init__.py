"""HTTP API for Inkpost."""
