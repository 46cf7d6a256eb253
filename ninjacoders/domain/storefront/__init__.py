"""Domain model for the storefront bounded context."""
