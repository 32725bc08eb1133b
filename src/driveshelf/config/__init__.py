"""Configuration loading, path policy and host settings for driveshelf."""
