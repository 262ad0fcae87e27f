"""Pytest configuration and fixtures for pysensibo tests."""

from typing import Any
from unittest.mock import Mock

import pytest
import requests

from pysensibo import SensiboAPI

TEST_API_KEY = "test-api-key"
TEST_POD_ID = "abc123"


def make_response(payload: Any, status_code: int = 200) -> Mock:
    """Build a mocked requests.Response returning the given JSON payload.

    Args:
        payload: Decoded JSON body the response should return.
        status_code: HTTP status; 400 and above make raise_for_status raise.

    Returns:
        A Mock standing in for requests.Response.

    """
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error", response=response)
    else:
        response.raise_for_status.return_value = None
    return response


def envelope(result: Any) -> dict:
    """Wrap a result the way the service does."""
    return {"status": "success", "result": result}


@pytest.fixture
def session() -> Mock:
    """Fixture providing a mocked requests session."""
    mock = Mock(spec=requests.Session)
    mock.get.return_value = make_response(envelope({}))
    mock.post.return_value = make_response(envelope({}))
    return mock


@pytest.fixture
def client(session: Mock) -> SensiboAPI:
    """Fixture providing a client wired to the mocked session."""
    return SensiboAPI(TEST_API_KEY, session=session)


@pytest.fixture
def sample_historical_response() -> dict:
    """Fixture providing a historicalMeasurements response.

    The humidity series is missing t3 and the temperature series is missing
    t0, so only t1 and t2 appear in both.

    """
    return envelope(
        {
            "temperature": [
                {"time": "2024-06-01T10:00:00Z", "value": 20.0},
                {"time": "2024-06-01T10:15:00Z", "value": 21.0},
                {"time": "2024-06-01T10:30:00Z", "value": 22.5},
            ],
            "humidity": [
                {"time": "2024-06-01T09:45:00Z", "value": 60.0},
                {"time": "2024-06-01T10:00:00Z", "value": 55.0},
                {"time": "2024-06-01T10:15:00Z", "value": 57.0},
            ],
        }
    )
