import dataclasses

import pytest

from backoffhttp.domain.exceptions import InvalidConfigurationError
from backoffhttp.domain.models.retry import FatalFailure, RetryableFailure, RetryPolicy


def test_defaults():
    policy = RetryPolicy()
    assert policy.max_attempts == 10
    assert policy.initial_delay == 0.5
    assert policy.max_delay is None
    assert policy.cancellable_backoff is True


@pytest.mark.parametrize("max_attempts, initial_delay", [(1, 0.001), (3, 0.1), (10, 0.5), (50, 2)])
def test_valid_values_construct(max_attempts, initial_delay):
    policy = RetryPolicy(max_attempts=max_attempts, initial_delay=initial_delay)
    assert policy.max_attempts == max_attempts
    assert policy.initial_delay == initial_delay


@pytest.mark.parametrize("max_attempts", [0, -1, -10, True, 2.5, "3", None])
def test_invalid_max_attempts_rejected(max_attempts):
    with pytest.raises(InvalidConfigurationError, match="retry count"):
        RetryPolicy(max_attempts=max_attempts)


@pytest.mark.parametrize("initial_delay", [0, 0.0, -0.5, -1, None, "0.5"])
def test_invalid_initial_delay_rejected(initial_delay):
    with pytest.raises(InvalidConfigurationError, match="delay greater than zero"):
        RetryPolicy(initial_delay=initial_delay)


def test_invalid_max_delay_rejected():
    with pytest.raises(InvalidConfigurationError, match="maximum delay"):
        RetryPolicy(max_delay=0)


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        RetryPolicy(max_attempts=0)


def test_policy_is_immutable():
    policy = RetryPolicy()
    with pytest.raises(dataclasses.FrozenInstanceError):
        policy.max_attempts = 3


def test_delays_double_without_cap():
    policy = RetryPolicy(max_attempts=5, initial_delay=0.1)
    assert list(policy.delays()) == pytest.approx([0.1, 0.2, 0.4, 0.8])


def test_delays_respect_max_delay():
    policy = RetryPolicy(max_attempts=6, initial_delay=1.0, max_delay=3.0)
    assert list(policy.delays()) == [1.0, 2.0, 3.0, 3.0, 3.0]


def test_single_attempt_has_no_delays():
    assert list(RetryPolicy(max_attempts=1).delays()) == []


def test_next_delay():
    policy = RetryPolicy(initial_delay=0.5)
    assert policy.next_delay(0.5) == 1.0
    assert RetryPolicy(max_delay=0.75).next_delay(0.5) == 0.75


def test_classified_failures_compare_by_value():
    error = RuntimeError("boom")
    assert RetryableFailure(429, "Too Many Requests") == RetryableFailure(429, "Too Many Requests")
    assert FatalFailure(error).error is error


def test_first_delay_capped_by_max_delay():
    assert RetryPolicy(initial_delay=0.5).first_delay() == 0.5
    assert RetryPolicy(initial_delay=2.0, max_delay=1.0).first_delay() == 1.0
    assert next(RetryPolicy(initial_delay=2.0, max_delay=1.0).delays()) == 1.0
