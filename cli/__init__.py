"""Command-line entry point for mig."""
