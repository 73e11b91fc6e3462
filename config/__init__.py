"""Connection parameters and their defaults."""

from config.connection import ConnectionParameters, load_connection_parameters

__all__ = ["ConnectionParameters", "load_connection_parameters"]
