"""Blog content-management API."""
