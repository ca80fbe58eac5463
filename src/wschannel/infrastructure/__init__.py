"""Infrastructure layer: concrete transports."""
