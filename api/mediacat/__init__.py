"""Tag-indexed media catalog service."""
