"""Domain layer for Onboard."""
