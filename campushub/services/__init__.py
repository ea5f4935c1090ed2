"""Integrations with the store and upstream HTTP resources."""
