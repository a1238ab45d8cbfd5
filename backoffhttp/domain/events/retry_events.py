"""Domain Events emitted while sending a request through the retry layer."""

from dataclasses import dataclass, field
import time
from typing import Optional


@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass


@dataclass
class SendAttemptStarted(DomainEvent):
    """Event triggered right before a send attempt."""
    method: str
    url: str
    attempt_number: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class SendSucceeded(DomainEvent):
    """Event triggered when an attempt returns a response."""
    method: str
    url: str
    attempt_number: int
    latency_ms: float
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryScheduled(DomainEvent):
    """Event triggered when a throttled attempt will be retried."""
    method: str
    url: str
    attempt_number: int
    delay_seconds: float
    status_code: int
    timestamp: float = field(default_factory=time.time)


@dataclass
class SendFailed(DomainEvent):
    """Event triggered when an attempt fails with a non-retryable error."""
    method: str
    url: str
    attempt_number: int
    error_type: str
    error_message: str
    timestamp: float = field(default_factory=time.time)


@dataclass
class RetryBudgetExhausted(DomainEvent):
    """Event triggered when every permitted attempt was throttled."""
    method: str
    url: str
    max_attempts: int
    timestamp: float = field(default_factory=time.time)
