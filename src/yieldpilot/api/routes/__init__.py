"""HTTP routes for health and accounts."""
