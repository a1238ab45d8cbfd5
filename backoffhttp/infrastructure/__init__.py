"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the package to the outside world (httpx, configuration files,
logging handlers) by implementing the interfaces defined in the domain layer.
"""
