"""Feature modules built on the access core."""
