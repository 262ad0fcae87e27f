"""Sensibo Sky API Client"""

import logging
import os
from collections.abc import Iterable
from typing import Any, Dict, List, Mapping, Optional, Union

import pandas as pd
import requests

from .models import AcState, SmartModeUpdate

_LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://home.sensibo.com/api/v2/"
API_KEY_ENV = "SENSIBO_API_KEY"

DEFAULT_STATES = 10
MAX_STATES = 20
DEFAULT_DAYS = 1
MAX_DAYS = 7

MEASUREMENT_COLUMNS = ["time", "temperature", "humidity"]

IdArg = Union[str, Iterable]


class SensiboError(Exception):
    """Base exception for Sensibo client errors."""


class SensiboInvalidArgumentError(SensiboError, ValueError):
    """Raised when a call is made with an argument the API cannot take."""


class SensiboConfigError(SensiboError):
    """Raised when no API key is available for a request."""


def single_id(value: IdArg, kind: str = "pod") -> str:
    """
    Reduce an id argument to exactly one id.

    A one-element collection (list, tuple, set, pandas Series, ...) is
    unwrapped; anything holding more (or fewer) than one id is rejected.

    Raises:
        SensiboInvalidArgumentError: If more than one id was given
    """
    if isinstance(value, Iterable) and not isinstance(value, (str, bytes)):
        values = list(value)
        if len(values) != 1:
            raise SensiboInvalidArgumentError(f"You must specify only one {kind} id here (got {len(values)}).")
        (value,) = values
    if value is None or value == "":
        raise SensiboInvalidArgumentError(f"A {kind} id is required.")
    return str(value)


def clamp(value: Optional[int], default: int, upper: int, lower: int = 1) -> int:
    """Apply the default for None, then pin the value into [lower, upper]."""
    if value is None:
        value = default
    return max(lower, min(int(value), upper))


def unwrap_result(data: Any) -> Any:
    """Strip the service's {"status": ..., "result": ...} envelope if present."""
    if isinstance(data, dict) and "status" in data and "result" in data:
        return data["result"]
    return data


def merge_measurements(temperature: Optional[List[Dict]], humidity: Optional[List[Dict]]) -> pd.DataFrame:
    """
    Join the temperature and humidity series on their timestamp.

    Each series is a list of {"time": ..., "value": ...} points. Only
    timestamps present in both series are kept; the result is sorted by
    time with columns time, temperature, humidity.
    """
    temps = pd.DataFrame(temperature or [], columns=["time", "value"]).rename(columns={"value": "temperature"})
    hums = pd.DataFrame(humidity or [], columns=["time", "value"]).rename(columns={"value": "humidity"})

    df = temps.merge(hums, on="time", how="inner", sort=True)
    return df[MEASUREMENT_COLUMNS].reset_index(drop=True)


class SensiboAPI:
    """
    Sensibo Sky API Client for reading and controlling A/C pods.

    Example usage as a library:
        from pysensibo import SensiboAPI

        with SensiboAPI("your-api-key") as api:
            pod = api.list_devices()[0]
            print(api.probe_current(pod))

            # Turn on and cool to 26 degrees
            api.set_state(pod, on=True, mode="cool", temperature=26)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
        quiet: bool = True,
    ):
        """
        Initialize the API client.

        Args:
            api_key: Key from https://home.sensibo.com/me/api, used by every
                call that doesn't pass its own
            base_url: API root, all endpoint paths are relative to it
            session: requests session to send through (one is created if omitted)
            quiet: If True, suppress progress logging (default for library use)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/") + "/"
        self.quiet = quiet
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **kwargs) -> "SensiboAPI":
        """Build a client whose default key comes from SENSIBO_API_KEY."""
        environ = os.environ if environ is None else environ
        return cls(api_key=environ.get(API_KEY_ENV), **kwargs)

    def __enter__(self) -> "SensiboAPI":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self):
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self.session.close()

    def _log(self, msg: str):
        if not self.quiet:
            _LOGGER.info(msg)

    def _resolve_key(self, api_key: Optional[str]) -> str:
        key = api_key or self.api_key
        if not key:
            raise SensiboConfigError(f"No API key given. Pass api_key or set {API_KEY_ENV}.")
        return key

    def _request(
        self,
        method: str,
        path: str,
        api_key: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        query = {"apiKey": self._resolve_key(api_key)}
        if params:
            query.update(params)
        url = f"{self.base_url}{path}"
        self._log(f"[*] {method} {path}")

        if method == "POST":
            response = self.session.post(url, params=query, json=payload)
        else:
            response = self.session.get(url, params=query)
        response.raise_for_status()

        data = unwrap_result(response.json())
        _LOGGER.debug("%s %s -> %s", method, path, response.status_code)
        return data

    # =========================================================================
    # Pods
    # =========================================================================

    def list_devices(self, api_key: Optional[str] = None) -> List[str]:
        """
        Get the ids of all pods on the account.

        Returns:
            List of pod id strings
        """
        pods = self._request("GET", "users/me/pods", api_key=api_key)
        return [pod["id"] for pod in pods or []]

    def get_device_info(self, device_id: IdArg, api_key: Optional[str] = None) -> Dict[str, Any]:
        """Get the details the service holds for one pod."""
        pod = single_id(device_id)
        return self._request("GET", f"pods/{pod}", api_key=api_key)

    # =========================================================================
    # A/C states
    # =========================================================================

    def list_states(self, device_id: IdArg, count: Optional[int] = DEFAULT_STATES, api_key: Optional[str] = None) -> List[Dict[str, Any]]:
        """
        Get the current and previous states of a pod, newest first.

        Args:
            device_id: Pod id
            count: Number of states to fetch; None means 10, values above 20
                are lowered to 20. count=1 still returns a list.

        Returns:
            List of state dicts
        """
        pod = single_id(device_id)
        limit = clamp(count, DEFAULT_STATES, MAX_STATES)
        states = self._request("GET", f"pods/{pod}/acStates", api_key=api_key, params={"limit": limit})
        if states is None:
            return []
        if isinstance(states, dict):
            return [states]
        return list(states)

    def get_state(self, device_id: IdArg, state_id: IdArg, api_key: Optional[str] = None) -> Dict[str, Any]:
        """Get the details of one recorded state of a pod."""
        pod = single_id(device_id)
        state = single_id(state_id, kind="state")
        return self._request("GET", f"pods/{pod}/acStates/{state}", api_key=api_key)

    def set_state(
        self,
        device_id: IdArg,
        on: Optional[bool] = None,
        mode: Optional[str] = None,
        fan: Optional[str] = None,
        unit: Optional[str] = None,
        temperature: Optional[Union[int, float]] = None,
        swing: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Set the A/C state of a pod. None values are left unchanged.

        Valid values depend on the A/C model, see models.MODES and friends
        for the usual ones.

        Args:
            device_id: Pod id
            on: True to turn the A/C on, False to turn it off
            mode: "cool", "hot", "dry" or "fan"
            fan: "low", "medium", "high" or "auto"
            unit: "C" or "F"
            temperature: Target temperature
            swing: "stopped" or "rangeFull"

        Returns:
            Dict with the applied acState and the command result
        """
        state = AcState(on=on, mode=mode, fan=fan, unit=unit, temperature=temperature, swing=swing)
        return self.set_state_from(device_id, state, api_key=api_key)

    def set_state_from(self, device_id: IdArg, state: AcState, api_key: Optional[str] = None) -> Dict[str, Any]:
        """Send a prebuilt AcState to a pod."""
        pod = single_id(device_id)
        if state.is_empty:
            self._log("[*] Empty state update, nothing will change")
        return self._request("POST", f"pods/{pod}/acStates", api_key=api_key, payload={"acState": state.to_payload()})

    # =========================================================================
    # Measurements
    # =========================================================================

    def probe_current(self, device_id: IdArg, api_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Get the last measurement sent by a pod.

        Pods usually report every 90 seconds. The returned dict holds the
        time (with the server's secondsAgo), temperature and humidity.
        """
        pod = single_id(device_id)
        measurements = self._request("GET", f"pods/{pod}/measurements", api_key=api_key)
        if isinstance(measurements, list):
            return measurements[0] if measurements else {}
        return measurements

    def probe_historical(self, device_id: IdArg, days: Optional[int] = DEFAULT_DAYS, api_key: Optional[str] = None) -> pd.DataFrame:
        """
        Get up to 7 days of measurements from a pod, today included.

        Args:
            device_id: Pod id
            days: Days of history; None means 1, values above 7 are lowered to 7

        Returns:
            DataFrame with time, temperature and humidity columns, one row per
            timestamp reported in both series
        """
        pod = single_id(device_id)
        days = clamp(days, DEFAULT_DAYS, MAX_DAYS)
        history = self._request("GET", f"pods/{pod}/historicalMeasurements", api_key=api_key, params={"days": days}) or {}
        return merge_measurements(history.get("temperature"), history.get("humidity"))

    # =========================================================================
    # Climate React (smart mode)
    # =========================================================================

    def get_smart_mode(self, device_id: IdArg, api_key: Optional[str] = None) -> Dict[str, Any]:
        """Get the Climate React settings of a pod."""
        pod = single_id(device_id)
        return self._request("GET", f"pods/{pod}/smartmode", api_key=api_key)

    def set_smart_mode(self, device_id: IdArg, enabled: Optional[bool] = None, api_key: Optional[str] = None) -> Dict[str, Any]:
        """
        Enable or disable Climate React on a pod.

        Args:
            device_id: Pod id
            enabled: True to enable, False to disable, None sends an empty update

        Returns:
            Updated Climate React settings
        """
        pod = single_id(device_id)
        update = SmartModeUpdate(enabled=enabled)
        return self._request("POST", f"pods/{pod}/smartmode", api_key=api_key, payload=update.to_payload())
