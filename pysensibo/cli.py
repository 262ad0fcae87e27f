"""Command-line interface for pysensibo"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

import requests
from dotenv import load_dotenv

from .api import API_KEY_ENV, DEFAULT_BASE_URL, SensiboAPI, SensiboError
from .models import FAN_LEVELS, MODES, SWING_MODES, UNITS


def print_json(data):
    print(json.dumps(data, indent=2, default=str))


def fail(msg: str, quiet: bool):
    print(json.dumps({"error": msg}) if quiet else f"[-] {msg}")
    sys.exit(1)


def temperature(text: str):
    """Parse a setpoint, keeping whole numbers as ints ('26' -> 26, '22.5' -> 22.5)."""
    value = float(text)
    return int(value) if value.is_integer() else value


def print_device_list(api: SensiboAPI, pods: List[str]):
    """Print formatted list of pods"""
    if not pods:
        print("No pods found")
        return

    print("\nPods:")
    print("=" * 60)

    for idx, pod in enumerate(pods):
        info = api.get_device_info(pod)
        room = info.get("room", {}) if isinstance(info, dict) else {}
        name = room.get("name", "") if isinstance(room, dict) else ""
        print(f"\n[Pod {idx}] {name or pod}")
        print(f"  ID: {pod}")

    print("\n" + "=" * 60)
    print("Usage examples:")
    print("  sensibo --pod 0 --probe")
    print("  sensibo --pod 0 --set --on --mode cool --temp 24")
    print("=" * 60)


def resolve_pod(identifier: str, pods: List[str]) -> Optional[str]:
    """Find a pod by index (e.g. "0") or by id."""
    if identifier in pods:
        return identifier
    if identifier.isdigit():
        idx = int(identifier)
        if 0 <= idx < len(pods):
            return pods[idx]
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sensibo",
        description="Sensibo Sky A/C Control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sensibo --list                                 # List pods
  sensibo --info                                 # Details of the first pod
  sensibo --states 5                             # Last 5 states
  sensibo --probe                                # Latest measurement
  sensibo --history 7                            # A week of measurements
  sensibo --pod 1 --set --on --mode cool --temp 24
  sensibo --smartmode-off                        # Disable Climate React

Environment variables (or use .env file):
  SENSIBO_API_KEY - Your key from https://home.sensibo.com/me/api
        """,
    )

    parser.add_argument("--key", default=os.environ.get(API_KEY_ENV), help="Sensibo API key")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API root URL")
    parser.add_argument("--pod", "-p", default="0", help="Pod index or id (default: 0)")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet mode (JSON output only)")

    actions = parser.add_argument_group("actions")
    actions.add_argument("--list", "-l", action="store_true", help="List all pods")
    actions.add_argument("--info", "-I", action="store_true", help="Show pod details as JSON")
    actions.add_argument("--states", "-S", type=int, nargs="?", const=10, metavar="N", help="Show the last N states (max 20)")
    actions.add_argument("--state", metavar="STATE_ID", help="Show one state")
    actions.add_argument("--probe", "-P", action="store_true", help="Show the latest measurement")
    actions.add_argument("--history", "-H", type=int, nargs="?", const=1, metavar="DAYS", help="Show DAYS of measurements (max 7)")
    actions.add_argument("--set", action="store_true", help="Change the A/C state using the options below")
    actions.add_argument("--smartmode", action="store_true", help="Show Climate React settings")
    actions.add_argument("--smartmode-on", action="store_true", help="Enable Climate React")
    actions.add_argument("--smartmode-off", action="store_true", help="Disable Climate React")

    state = parser.add_argument_group("state options (with --set)")
    power = state.add_mutually_exclusive_group()
    power.add_argument("--on", dest="on", action="store_const", const=True, help="Turn the A/C on")
    power.add_argument("--off", dest="on", action="store_const", const=False, help="Turn the A/C off")
    state.add_argument("--mode", "-m", choices=MODES, help="A/C mode")
    state.add_argument("--fan", "-f", choices=FAN_LEVELS, help="Fan level")
    state.add_argument("--unit", "-u", choices=UNITS, help="Temperature unit")
    state.add_argument("--temp", "-t", type=temperature, help="Target temperature")
    state.add_argument("--swing", choices=SWING_MODES, help="Swing mode")

    return parser


def run(api: SensiboAPI, args: argparse.Namespace, quiet: bool):
    pods = api.list_devices()

    if args.list:
        if args.quiet:
            print_json(pods)
        else:
            print_device_list(api, pods)
        return

    if not pods:
        fail("No pods found", quiet)

    pod = resolve_pod(args.pod, pods)
    if not pod:
        fail(f"Pod not found: {args.pod}", quiet)

    if not quiet:
        print(f"[*] Target: {pod}")

    if args.info:
        print_json(api.get_device_info(pod))
    elif args.states is not None:
        print_json(api.list_states(pod, count=args.states))
    elif args.state:
        print_json(api.get_state(pod, args.state))
    elif args.probe:
        print_json(api.probe_current(pod))
    elif args.history is not None:
        df = api.probe_historical(pod, days=args.history)
        print(df.to_json(orient="records", indent=2))
    elif args.set:
        print_json(
            api.set_state(
                pod, on=args.on, mode=args.mode, fan=args.fan, unit=args.unit, temperature=args.temp, swing=args.swing
            )
        )
    elif args.smartmode:
        print_json(api.get_smart_mode(pod))
    elif args.smartmode_on or args.smartmode_off:
        print_json(api.set_smart_mode(pod, enabled=bool(args.smartmode_on)))
    else:
        print_device_list(api, pods)


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point"""
    load_dotenv(Path.cwd() / ".env")
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.key:
        print(f"Error: API key required. Set {API_KEY_ENV}")
        print("       environment variable, create a .env file, or use --key")
        sys.exit(1)

    if args.smartmode_on and args.smartmode_off:
        parser.error("--smartmode-on and --smartmode-off are mutually exclusive")

    has_command = (
        args.list
        or args.info
        or args.states is not None
        or args.state
        or args.probe
        or args.history is not None
        or args.set
        or args.smartmode
        or args.smartmode_on
        or args.smartmode_off
    )
    quiet = args.quiet or bool(has_command)

    if not quiet:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    with SensiboAPI(args.key, base_url=args.base_url, quiet=quiet) as api:
        try:
            run(api, args, quiet)
        except (SensiboError, requests.RequestException) as e:
            fail(str(e), quiet)


if __name__ == "__main__":
    main()
