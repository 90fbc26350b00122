"""HTTP client integration."""
