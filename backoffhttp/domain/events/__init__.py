"""Domain Event definitions.

Represents significant occurrences while sending a request (attempts,
scheduled retries, final outcomes) that callers may want to observe.
"""
