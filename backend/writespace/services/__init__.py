"""Business logic on top of the repository."""
