"""Create, drop, describe and interactive SQL operations."""
