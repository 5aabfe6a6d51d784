"""Infrastructure adapters: storage, gateway, settings and wiring."""
