"""Command-line interface for schema-factory."""
