"""Infrastructure layer: API, auth, persistence and storage."""
