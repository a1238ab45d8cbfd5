"""Domain Layer: models, events, exceptions and interfaces.

Contains no I/O. Infrastructure components implement the interfaces
defined here.
"""
