"""Provider access and departure models."""
