"""Infrastructure: persistence, security primitives, and external collaborators."""
