"""Infrastructure implementations of the domain repositories."""
