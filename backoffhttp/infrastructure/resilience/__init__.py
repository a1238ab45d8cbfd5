"""API Resilience Implementations.

Contains failure classification and the provider that retries throttled
requests with exponential backoff.
Bounded Context: API Resilience
"""
