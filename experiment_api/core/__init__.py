"""Core configuration, logging and infrastructure wiring."""
