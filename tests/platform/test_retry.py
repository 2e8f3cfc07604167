"""Tests for the bounded retry helper used during cleanup."""

from __future__ import annotations

import pytest
from pytest_mock import MockerFixture

from appstage.platform.retry import retry_operation


def test_returns_true_on_first_success(mocker: MockerFixture) -> None:
    operation = mocker.Mock(return_value=None)
    sleep = mocker.Mock()

    assert retry_operation(operation, attempts=3, sleep=sleep) is True

    operation.assert_called_once_with()
    sleep.assert_not_called()


def test_retries_with_exponential_backoff_until_success(mocker: MockerFixture) -> None:
    operation = mocker.Mock(side_effect=[OSError("locked"), OSError("locked"), None])
    sleep = mocker.Mock()

    assert retry_operation(operation, attempts=5, delay_seconds=0.1, sleep=sleep) is True

    assert operation.call_count == 3
    assert [call.args[0] for call in sleep.call_args_list] == pytest.approx([0.1, 0.2])


def test_final_failure_is_swallowed_and_reported(mocker: MockerFixture) -> None:
    error = PermissionError("denied")
    operation = mocker.Mock(side_effect=error)
    on_failure = mocker.Mock()
    sleep = mocker.Mock()

    assert (
        retry_operation(
            operation, on_failure=on_failure, attempts=4, delay_seconds=1.5, sleep=sleep
        )
        is False
    )

    assert operation.call_count == 4
    assert on_failure.call_count == 4
    on_failure.assert_called_with(error)
    # Backoff is capped.
    assert [call.args[0] for call in sleep.call_args_list] == pytest.approx([1.5, 2.0, 2.0])


def test_rejects_non_positive_attempts(mocker: MockerFixture) -> None:
    with pytest.raises(ValueError):
        _ = retry_operation(mocker.Mock(), attempts=0)
