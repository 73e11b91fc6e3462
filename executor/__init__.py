"""Session handling and result materialization."""
