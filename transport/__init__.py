"""Transport layers (messaging platform I/O)."""
