"""
pysensibo - Sensibo Sky API Client

A Python library and CLI for reading and controlling Sensibo Sky A/C pods
via the Sensibo REST API.

Library Usage:
    from pysensibo import SensiboAPI

    api = SensiboAPI("your-api-key")
    pod = api.list_devices()[0]

    # Latest temperature/humidity
    print(api.probe_current(pod))

    # Turn on, cool to 26 degrees
    api.set_state(pod, on=True, mode="cool", temperature=26)

    # A week of measurements as a DataFrame
    df = api.probe_historical(pod, days=7)

CLI Usage:
    sensibo --list                  # List pod ids
    sensibo --probe                 # Latest measurement as JSON
    sensibo --history 7             # Historical measurements
    sensibo --set --on --temp 24    # Change the A/C state
    sensibo --smartmode-on          # Enable Climate React
"""

__version__ = "0.1.0"

from .api import (
    SensiboAPI,
    SensiboConfigError,
    SensiboError,
    SensiboInvalidArgumentError,
    merge_measurements,
)
from .models import FAN_LEVELS, MODES, SWING_MODES, UNITS, AcState, SmartModeUpdate

__all__ = [
    "SensiboAPI",
    "SensiboError",
    "SensiboInvalidArgumentError",
    "SensiboConfigError",
    "AcState",
    "SmartModeUpdate",
    "MODES",
    "FAN_LEVELS",
    "UNITS",
    "SWING_MODES",
    "merge_measurements",
    "__version__",
]
