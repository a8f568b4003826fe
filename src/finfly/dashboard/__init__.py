"""Dashboard layout storage."""
