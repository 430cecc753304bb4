"""Boundary adapters: external systems the service talks to."""
