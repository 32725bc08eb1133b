"""Feature packages: metadata loading, album grouping and feed projection."""
