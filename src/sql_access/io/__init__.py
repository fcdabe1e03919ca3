"""I/O layer: statement execution against the database."""
