"""Infrastructure adapters: logging and the Google Drive HTTP boundary."""
