"""Infrastructure layer - gocode process adapters, settings stores and
default workspace collaborators."""
