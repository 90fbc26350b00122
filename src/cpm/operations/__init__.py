"""Install, uninstall and listing operations."""
