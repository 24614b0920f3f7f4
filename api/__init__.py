"""HTTP API of the math question bank."""
