"""Concrete HTTP providers."""
