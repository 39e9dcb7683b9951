"""File storage for uploaded pictures."""
