"""Core utilities: exceptions and display formatting."""
