"""Command-line interface for AirZone bridge monitoring and control."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TYPE_CHECKING

from .config import BridgeConfig
from .const import (
    DEFAULT_PORT,
    DEFAULT_REFRESH_INTERVAL,
    DEFAULT_TIMEOUT,
    AirQualityMode,
    SleepTimer,
    Stage,
    ZoneMode,
)
from .detailed_errors import format_errors
from .exceptions import AirzoneError, ConfigError
from .manager import AirzoneApiManager
from .models import PutRequestTarget

if TYPE_CHECKING:
    from .cache import Snapshot
    from .models import SystemInfo, ZoneSnapshot

_LOGGER = logging.getLogger(__name__)

_ON_WORDS = ("on", "1", "true", "enable")

_MODE_MAP: dict[str, ZoneMode] = {
    "stop": ZoneMode.STOP,
    "off": ZoneMode.STOP,
    "cool": ZoneMode.COOLING,
    "cooling": ZoneMode.COOLING,
    "heat": ZoneMode.HEATING,
    "heating": ZoneMode.HEATING,
    "fan": ZoneMode.FAN,
    "dry": ZoneMode.DRY,
    "auto": ZoneMode.AUTO,
}
_STAGE_MAP: dict[str, Stage] = {
    "air": Stage.AIR,
    "radiant": Stage.RADIANT,
    "combined": Stage.COMBINED,
}
_SLEEP_MAP: dict[str, SleepTimer] = {
    "off": SleepTimer.OFF,
    "0": SleepTimer.OFF,
    "30": SleepTimer.THIRTY,
    "60": SleepTimer.SIXTY,
    "90": SleepTimer.NINETY,
}
_AQ_MAP: dict[str, AirQualityMode] = {
    "off": AirQualityMode.OFF,
    "on": AirQualityMode.ON,
    "auto": AirQualityMode.AUTO,
}
_ECO_MAP: dict[str, str] = {
    "off": "OFF",
    "manual": "MANUAL",
    "a": "A",
    "a+": "A_PLUS",
    "a++": "A_PLUS_PLUS",
}


def _target_label(target: PutRequestTarget) -> str:
    if target.is_all_zones:
        return f"system {target.system_id}, all zones"
    return f"system {target.system_id}, zone {target.zone_id}"


def _print_zone(zone: ZoneSnapshot) -> None:
    unit = "°F" if zone.units_name == "FAHRENHEIT" else "°C"
    master = " [master]" if zone.is_master_zone else ""
    print(f"  Zone {zone.system_id}/{zone.zone_id} ({zone.name}){master}:")
    print(f"    Power: {'On' if zone.on else 'Off'}")
    print(f"    Temperature: {zone.room_temperature}{unit}")
    print(f"    Humidity: {zone.humidity}%")
    if zone.double_setpoint:
        print(f"    Heat setpoint: {zone.heat_setpoint}{unit}")
        print(f"    Cool setpoint: {zone.cool_setpoint}{unit}")
    else:
        print(f"    Setpoint: {zone.setpoint}{unit}")
    print(f"    Mode: {zone.mode_name or zone.mode}")
    if zone.modes:
        modes = ", ".join(str(name) for name in zone.allowed_mode_names)
        print(f"    Allowed modes: {modes}")
    print(f"    Fan speed: {zone.speed} (max {zone.speeds})")
    print(f"    Sleep: {zone.sleep_name or zone.sleep}")
    if zone.air_quality is not None:
        print(f"    Air quality: {zone.air_quality_name or zone.air_quality}")
    if zone.eco_adapt is not None:
        print(f"    Eco adapt: {zone.eco_adapt_name or zone.eco_adapt}")
    for line in format_errors(zone.errors):
        print(f"    Error: {line}")


def _print_system(system: SystemInfo) -> None:
    print(f"  System {system.system_id} ({system.system_type_name}):")
    print(f"    Manufacturer: {system.manufacturer}")
    print(f"    Firmware: {system.firmware}")
    if system.power is not None:
        print(f"    Power: {system.power} W")
    for line in format_errors(system.errors):
        print(f"    Error: {line}")


def _print_state(zones: list[ZoneSnapshot], systems: list[SystemInfo]) -> None:
    """Display the cached systems and zones."""
    print("\n--- AirZone State ---")
    for system in systems:
        _print_system(system)
    for zone in zones:
        _print_zone(zone)
    print("---------------------\n")


def _print_help(target: PutRequestTarget) -> None:
    """Display available commands."""
    print("Commands:")
    print("  status                       Show systems and zones")
    print(
        f"  zone <system> <zone>         "
        f"Select target, zone 0 = all zones (current: {_target_label(target)})"
    )
    print("  on | off                     Switch the target on or off")
    print("  setpoint <temp>              Set setpoint")
    print("  cool <temp>                  Set cool setpoint")
    print("  heat <temp>                  Set heat setpoint")
    print("  name <text>                  Rename the zone")
    print("  mode <stop|cool|heat|fan|dry|auto>")
    print("                               Set mode (master zone only)")
    print("  speed <n>                    Set fan speed")
    print("  sleep <off|30|60|90>         Set sleep timer")
    print("  coldstage <air|radiant|combined>")
    print("  heatstage <air|radiant|combined>")
    print("  aq <off|on|auto>             Set air quality mode")
    print("  eco <off|manual|a|a+|a++>    Set eco adapt")
    print("  antifreeze <on|off>          Set anti freeze")
    print("  refresh                      Poll the bridge now")
    print("  server                       Show bridge properties")
    print("  quit                         Disconnect and exit")


def _report(sent: bool) -> None:  # noqa: FBT001
    print("Sent." if sent else "Command not sent (see log).")


async def _cmd_select_zone(
    manager: AirzoneApiManager, parts: list[str], target: PutRequestTarget
) -> PutRequestTarget:
    """Handle the zone command."""
    try:
        new_target = PutRequestTarget(int(parts[1]), int(parts[2]))
    except ValueError:
        print("Usage: zone <system> <zone>")
        return target
    if new_target.is_all_zones:
        zone = await manager.get_master_zone(new_target.system_id)
    else:
        zone = await manager.get_zone(new_target.system_id, new_target.zone_id)
    if zone is None:
        available = ", ".join(
            f"{z.system_id}/{z.zone_id}" for z in await manager.get_zones()
        )
        print(f"Zone {parts[1]}/{parts[2]} not found. Available: {available}")
        return target
    print(f"Active target: {_target_label(new_target)} ({zone.name})")
    return new_target


async def _cmd_number(
    manager: AirzoneApiManager,
    target: PutRequestTarget,
    label: str,
    raw: str,
) -> None:
    """Handle the commands taking a number."""
    try:
        value = float(raw)
    except ValueError:
        print(f"Invalid number: {raw}")
        return
    print(f"Setting {label} to {raw} ({_target_label(target)})")
    if label == "setpoint":
        _report(await manager.set_setpoint(target, value))
    elif label == "cool setpoint":
        _report(await manager.set_cool_setpoint(target, value))
    elif label == "heat setpoint":
        _report(await manager.set_heat_setpoint(target, value))
    else:
        _report(await manager.set_speed(target, value))


async def _handle_command(  # noqa: C901, PLR0912
    manager: AirzoneApiManager,
    cmd: str,
    parts: list[str],
    target: PutRequestTarget,
) -> PutRequestTarget | None:
    """Handle a single interactive command.

    Returns the (possibly updated) active target, or None to quit.
    """
    if parts[0] in ("quit", "q"):
        return None

    if parts[0] == "status":
        _print_state(await manager.get_zones(), await manager.get_systems())

    elif parts[0] == "zone" and len(parts) >= 3:
        target = await _cmd_select_zone(manager, parts, target)

    elif parts[0] in ("on", "off"):
        print(f"Switching {parts[0]} ({_target_label(target)})")
        _report(await manager.set_on(target, parts[0] == "on"))

    elif parts[0] == "setpoint" and len(parts) >= 2:
        await _cmd_number(manager, target, "setpoint", parts[1])

    elif parts[0] == "cool" and len(parts) >= 2:
        await _cmd_number(manager, target, "cool setpoint", parts[1])

    elif parts[0] == "heat" and len(parts) >= 2:
        await _cmd_number(manager, target, "heat setpoint", parts[1])

    elif parts[0] == "speed" and len(parts) >= 2:
        await _cmd_number(manager, target, "speed", parts[1])

    elif parts[0] == "name" and len(parts) >= 2:
        name = cmd.split(maxsplit=1)[1].strip()
        print(f"Renaming to {name!r} ({_target_label(target)})")
        _report(await manager.set_name(target, name))

    elif parts[0] == "mode" and len(parts) >= 2:
        mode = _MODE_MAP.get(parts[1])
        if mode is not None:
            print(f"Setting mode to {mode.name} ({_target_label(target)})")
            _report(await manager.set_mode(target, mode))
        else:
            print(f"Unknown mode: {parts[1]}")

    elif parts[0] in ("coldstage", "heatstage") and len(parts) >= 2:
        stage = _STAGE_MAP.get(parts[1])
        if stage is None:
            print(f"Unknown stage: {parts[1]}")
        elif parts[0] == "coldstage":
            _report(await manager.set_cold_stage(target, stage))
        else:
            _report(await manager.set_heat_stage(target, stage))

    elif parts[0] == "sleep" and len(parts) >= 2:
        sleep = _SLEEP_MAP.get(parts[1])
        if sleep is not None:
            _report(await manager.set_sleep(target, sleep))
        else:
            print(f"Unknown sleep timer: {parts[1]}. Try: off, 30, 60, 90")

    elif parts[0] == "aq" and len(parts) >= 2:
        aq_mode = _AQ_MAP.get(parts[1])
        if aq_mode is not None:
            _report(await manager.set_air_quality_mode(target, aq_mode))
        else:
            print(f"Unknown air quality mode: {parts[1]}")

    elif parts[0] == "eco" and len(parts) >= 2:
        eco = _ECO_MAP.get(parts[1])
        if eco is not None:
            _report(await manager.set_eco_adapt(target, eco))
        else:
            print(f"Unknown eco adapt level: {parts[1]}")

    elif parts[0] == "antifreeze" and len(parts) >= 2:
        _report(await manager.set_anti_freeze(target, parts[1] in _ON_WORDS))

    elif parts[0] == "refresh":
        ok = await manager.fetch_status()
        print("Refreshed." if ok else "Refresh failed (see log).")

    elif parts[0] == "server":
        props = await manager.get_server_properties()
        if props is None:
            print("Could not read server properties.")
        else:
            print(f"  MAC: {props.mac}")
            print(f"  Interface: {props.interface}")
            print(f"  WiFi channel: {props.wifi_channel}")
            print(f"  WiFi quality: {props.wifi_quality}")
            print(f"  WiFi RSSI: {props.wifi_rssi}")
            print(f"  Firmware: {props.firmware} ({props.type})")

    elif parts[0] in ("help", "?"):
        _print_help(target)

    else:
        print("Unknown command. Type 'help' for available commands.")

    return target


async def _do_monitor(config: BridgeConfig) -> None:
    """Run monitoring mode with interactive command loop."""
    print("\n=== MONITORING MODE ===")
    print(f"Bridge: {config.base_url}")

    manager = AirzoneApiManager(config)

    def on_update(snapshot: Snapshot) -> None:
        print(
            f"[<] Updated {len(snapshot.zones)} zones, "
            f"{len(snapshot.systems)} systems"
        )

    manager.add_update_callback(on_update)

    try:
        async with manager:
            target = PutRequestTarget(1, 1)
            print("\nPolling the bridge... (Ctrl+C to quit)")
            _print_help(target)
            print()

            loop = asyncio.get_running_loop()
            while True:
                line = await loop.run_in_executor(None, sys.stdin.readline)
                if not line:  # EOF
                    break
                cmd = line.strip()
                if not cmd:
                    continue

                parts = cmd.lower().split()
                result = await _handle_command(manager, cmd, parts, target)
                if result is None:
                    break
                target = result

    except AirzoneError as exc:
        print(f"Connection failed: {exc}")
    except KeyboardInterrupt:
        pass

    print("\nDisconnected.")


def main() -> None:
    """Entry point for the airzone-local CLI."""
    parser = argparse.ArgumentParser(description="AirZone Local API CLI")
    parser.add_argument("ip", help="Bridge IP address")
    parser.add_argument(
        "--port",
        type=int,
        default=DEFAULT_PORT,
        help=f"Port (default: {DEFAULT_PORT})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_REFRESH_INTERVAL,
        help=f"Poll interval in seconds (default: {DEFAULT_REFRESH_INTERVAL})",
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        config = BridgeConfig(
            args.ip,
            args.port,
            timeout=args.timeout,
            refresh_interval=args.interval,
        )
    except ConfigError as exc:
        parser.error(str(exc))

    asyncio.run(_do_monitor(config))
