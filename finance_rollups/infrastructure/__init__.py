"""Infrastructure layer: logging, settings and wiring."""
