"""Infrastructure layer: storage client and repository implementations."""
