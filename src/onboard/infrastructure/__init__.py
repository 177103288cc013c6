"""Infrastructure components: persistence, credentials, configuration, email and locale data."""
