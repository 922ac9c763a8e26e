"""Command-line interface for managing an eero network."""

from __future__ import annotations

import argparse
import io
import json
import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from rich import box
from rich.console import Console, RenderableType
from rich.table import Table
from rich.text import Text

from .client import EeroClient
from .config import ConfigStore, settings
from .errors import EeroError, ValidationError
from .filters import DeviceFilter, DeviceFilters
from .models import MAX_SIGNAL_BARS, Device
from .monitor import DeviceChange, DeviceMonitor
from .network import EeroService
from .profiles import ProfileMembership
from .resolve import (
    resolve_device,
    resolve_eero,
    resolve_network,
    resolve_profile,
    resolve_reservation,
)
from .utils import configure_logging, logger

configure_logging()

OUTPUT_WIDTH = 200
MONITOR_COLUMNS = (
    ("TIME", 8),
    ("ID", 12),
    ("NAME", 25),
    ("IP", 15),
    ("MAC", 17),
    ("STATUS", 7),
    ("TYPE", 8),
    ("PROFILE", 0),
)


def _create_store() -> ConfigStore:
    return ConfigStore()


def _create_client(token: str | None = None) -> EeroClient:
    return EeroClient(settings.base_url, token=token, timeout=settings.timeout)


@contextmanager
def _open_service(action: str) -> Iterator[EeroService]:
    """Yield a service bound to the stored session, mapping failures to exits."""
    store = _create_store()
    try:
        stored = store.load()
    except ValueError as exc:
        logger.bind(path=str(store.path)).error("Unable to read config file")
        raise SystemExit(f"Error: {exc}") from exc

    client = _create_client(stored.token or None)
    service = EeroService(client, store=store, network_id=stored.network_id or None)
    logger.bind(action=action).debug("Starting command")
    try:
        yield service
    except EeroError as exc:
        logger.bind(action=action).opt(exception=exc).debug("Command failed")
        logger.bind(action=action, error=str(exc)).error("eero command failed")
        raise SystemExit(f"Error: {exc}") from exc
    finally:
        logger.bind(action=action).debug("Closing eero client session")
        client.close()


def _ensure_network(service: EeroService) -> str:
    if not service.client.token:
        raise EeroError("not logged in. Run 'eero-cli login' first")
    if not service.validate_token():
        raise EeroError(
            "token is invalid or expired. Run 'eero-cli login' to re-authenticate"
        )
    return service.ensure_network()


def _render(renderable: RenderableType) -> str:
    buffer = io.StringIO()
    console = Console(
        file=buffer,
        width=OUTPUT_WIDTH,
        force_terminal=sys.stdout.isatty(),
        highlight=False,
        soft_wrap=True,
    )
    console.print(renderable)
    return buffer.getvalue().rstrip("\n")


def _render_table(
    headers: Sequence[str], rows: Iterable[Sequence[str]], *, print_fn=print
) -> None:
    rows = list(rows)
    if not rows:
        print_fn("No data to display")
        return

    table = Table(box=box.SIMPLE_HEAD, pad_edge=False)
    for header in headers:
        table.add_column(header, no_wrap=True)
    for row in rows:
        table.add_row(*(Text(cell) for cell in row))
    print_fn(_render(table))


def _dump_json(data: object, *, print_fn=print) -> None:
    formatted = json.dumps(data, indent=2, sort_keys=True, default=str)
    print_fn(formatted)


def _confirm(message: str, *, input_fn=input) -> bool:
    answer = input_fn(f"{message} [y/N]: ").strip().lower()
    return answer in {"y", "yes"}


def login(network: str | None = None, *, input_fn=input, print_fn=print) -> None:
    """Run the interactive login/verify handshake and store the session token."""
    with _open_service("login") as service:
        identity = input_fn("Enter your email or phone number: ").strip()
        if not identity:
            raise ValidationError("email or phone number is required")

        print_fn("Requesting verification code...")
        token = service.login(identity)

        print_fn("A verification code has been sent to your email/phone.")
        code = input_fn("Enter verification code: ").strip()
        if not code:
            raise ValidationError("verification code is required")

        print_fn("Verifying...")
        service.login_verify(token, code)

        store = service.store
        if store is not None:
            store.save(token, "")

        try:
            account = service.get_account()
        except EeroError as exc:
            logger.bind(error=str(exc)).warning("Account lookup after login failed")
            print_fn("Login successful! (Warning: couldn't fetch network info)")
            return

        if account.networks:
            if network:
                network_id = resolve_network(account.networks, network)
            else:
                network_id = account.networks[0].id
            service.use_network(network_id)
            name = next(n.name for n in account.networks if n.id == network_id)
            print_fn(f"Logged in to network: {name}")

        print_fn("Login successful! Token saved.")


def logout(*, print_fn=print) -> None:
    store = _create_store()
    store.clear()
    logger.bind(path=str(store.path)).info("Session cleared")
    print_fn("Logged out. Token cleared.")


def status(*, print_fn=print) -> None:
    """Show whether a valid session is stored and which account it belongs to."""
    with _open_service("status") as service:
        path = service.store.path if service.store is not None else None
        if not service.client.token:
            print_fn("Status: Not logged in")
            print_fn(f"Config: {path}")
            return

        print_fn("Status: Checking token...")
        if not service.validate_token():
            print_fn("Status: Token is invalid or expired")
            print_fn(f"Config: {path}")
            return

        account = service.get_account()
        print_fn("Status: Authenticated")
        if account.email:
            print_fn(f"Email: {account.email}")
        if account.phone:
            print_fn(f"Phone: {account.phone}")
        if account.name:
            print_fn(f"Name: {account.name}")
        if account.networks:
            print_fn("Networks:")
            for network in account.networks:
                premium = " (Premium)" if network.premium else ""
                marker = " *" if network.id == service.network_id else ""
                print_fn(f"  - {network.name}{premium}{marker}")
        print_fn(f"Config: {path}")


def _profile_display(device: Device) -> str:
    if device.is_guest:
        return "Guest"
    if device.profile is not None:
        return f"{device.profile_name} ({device.profile_id})"
    return ""


def _device_filter(
    service: EeroService, network_id: str, filters: DeviceFilters
) -> DeviceFilter:
    profiles = service.list_profiles(network_id) if filters.profile else []
    return DeviceFilter(filters, profiles)


def list_devices(filters: DeviceFilters | None = None, *, print_fn=print) -> None:
    """List devices on the active network, optionally filtered."""
    filters = filters or DeviceFilters()
    with _open_service("list devices") as service:
        network_id = _ensure_network(service)
        devices = service.list_devices(network_id)
        result = _device_filter(service, network_id, filters).apply(devices)

        _render_table(
            ["ID", "NAME", "IP", "MAC", "STATUS", "TYPE", "PROFILE"],
            (
                [
                    device.id,
                    device.display_name,
                    device.ip,
                    device.mac,
                    device.status,
                    device.connection,
                    _profile_display(device),
                ]
                for device in result.devices
            ),
            print_fn=print_fn,
        )

        if filters.active:
            print_fn(
                f"\nTotal: {result.count} devices (filtered by {result.description})"
            )
        else:
            print_fn(f"\nTotal: {result.total} devices")


def _monitor_header() -> str:
    names = "  ".join(
        f"{name:<{width}}" if width else name for name, width in MONITOR_COLUMNS
    )
    rules = "  ".join("-" * (width or 24) for _, width in MONITOR_COLUMNS)
    return f"{names}\n{rules}"


def _format_change(change: DeviceChange) -> Text:
    device = change.device
    changed = change.changed_fields
    status_changed = change.is_new or bool(changed & {"connected", "paused", "blocked"})
    ip_changed = change.is_new or "ip" in changed

    def cell(value: str, width: int, highlight: bool = False) -> Text:
        return Text(f"{value:<{width}}", style="bold" if highlight else "")

    parts = [
        cell(change.timestamp.strftime("%H:%M:%S"), 8),
        cell(device.id, 12),
        cell(device.display_name, 25, change.is_new),
        cell(device.ip, 15, ip_changed),
        cell(device.mac, 17),
        cell(device.status, 7, status_changed),
        cell(device.connection, 8),
        Text(_profile_display(device)),
    ]
    return Text("  ").join(parts)


def monitor_devices(
    filters: DeviceFilters | None = None,
    *,
    interval: float | None = None,
    print_fn=print,
    stop_event: threading.Event | None = None,
) -> None:
    """Print a row every time a device connects, disconnects or changes state."""
    filters = filters or DeviceFilters()
    if not interval or interval <= 0:
        interval = settings.monitor_interval

    with _open_service("monitor devices") as service:
        network_id = _ensure_network(service)
        monitor = DeviceMonitor(
            service,
            network_id,
            device_filter=_device_filter(service, network_id, filters),
            interval=interval,
        )

        print_fn(
            f"Monitoring devices every {interval:g} seconds. Press Ctrl+C to stop.\n"
        )
        print_fn(_monitor_header())

        def on_change(change: DeviceChange) -> None:
            print_fn(_render(_format_change(change)))

        def on_error(exc: EeroError, timestamp) -> None:
            print_fn(f"[{timestamp:%H:%M:%S}] Error fetching devices: {exc}")

        try:
            monitor.run(on_change, on_error=on_error, stop_event=stop_event)
        except KeyboardInterrupt:
            print_fn("\nMonitoring stopped.")


def _find_device(service: EeroService, network_id: str, query: str) -> str:
    return resolve_device(service.list_devices(network_id), query)


def pause_device(query: str, pause: bool = True, *, print_fn=print) -> None:
    with _open_service("pause device") as service:
        network_id = _ensure_network(service)
        device_id = _find_device(service, network_id, query)
        service.pause_device(network_id, device_id, pause)
        print_fn(f"Device {device_id} has been {'paused' if pause else 'unpaused'}")


def block_device(query: str, block: bool = True, *, print_fn=print) -> None:
    with _open_service("block device") as service:
        network_id = _ensure_network(service)
        device_id = _find_device(service, network_id, query)
        service.block_device(network_id, device_id, block)
        print_fn(f"Device {device_id} has been {'blocked' if block else 'unblocked'}")


def rename_device(query: str, name: str, *, print_fn=print) -> None:
    with _open_service("rename device") as service:
        if not name.strip():
            raise ValidationError("a device name is required")
        network_id = _ensure_network(service)
        device_id = _find_device(service, network_id, query)
        service.set_device_nickname(network_id, device_id, name)
        print_fn(f"Device {device_id} has been renamed to '{name}'")


def inspect_device(query: str, *, print_fn=print) -> None:
    with _open_service("inspect device") as service:
        network_id = _ensure_network(service)
        device_id = _find_device(service, network_id, query)
        _dump_json(service.get_device_raw(network_id, device_id), print_fn=print_fn)


def _find_profile(service: EeroService, network_id: str, query: str) -> str:
    return resolve_profile(service.list_profiles(network_id), query)


def list_profiles(*, print_fn=print) -> None:
    with _open_service("list profiles") as service:
        network_id = _ensure_network(service)
        profiles = service.list_profiles(network_id)
        if not profiles:
            print_fn("No profiles configured")
            return

        _render_table(
            ["ID", "NAME", "STATUS"],
            (
                [profile.id, profile.name, "paused" if profile.paused else "active"]
                for profile in profiles
            ),
            print_fn=print_fn,
        )
        print_fn(f"\nTotal: {len(profiles)} profiles")


def inspect_profile(query: str, *, print_fn=print) -> None:
    with _open_service("inspect profile") as service:
        network_id = _ensure_network(service)
        profile_id = _find_profile(service, network_id, query)
        _dump_json(service.get_profile_raw(network_id, profile_id), print_fn=print_fn)


def pause_profile(query: str, pause: bool = True, *, print_fn=print) -> None:
    with _open_service("pause profile") as service:
        network_id = _ensure_network(service)
        profile_id = _find_profile(service, network_id, query)
        service.pause_profile(network_id, profile_id, pause)
        print_fn(f"Profile {profile_id} has been {'paused' if pause else 'unpaused'}")


def add_profile_device(
    profile_query: str, device_query: str, *, print_fn=print
) -> None:
    with _open_service("add profile device") as service:
        network_id = _ensure_network(service)
        profile_id = _find_profile(service, network_id, profile_query)
        device_id = _find_device(service, network_id, device_query)
        profile = ProfileMembership(service).add_device(
            network_id, profile_id, device_id
        )
        print_fn(f"Device {device_id} has been added to profile {profile.name}")


def remove_profile_device(
    profile_query: str, device_query: str, *, print_fn=print
) -> None:
    with _open_service("remove profile device") as service:
        network_id = _ensure_network(service)
        profile_id = _find_profile(service, network_id, profile_query)
        device_id = _find_device(service, network_id, device_query)
        profile = ProfileMembership(service).remove_device(
            network_id, profile_id, device_id
        )
        print_fn(f"Device {device_id} has been removed from profile {profile.name}")


def list_eeros(*, print_fn=print) -> None:
    with _open_service("list eeros") as service:
        network_id = _ensure_network(service)
        eeros = service.list_eeros(network_id)
        if not eeros:
            print_fn("No eero nodes found")
            return

        _render_table(
            [
                "ID",
                "LOCATION",
                "STATUS",
                "GATEWAY",
                "IP",
                "MODEL",
                "CLIENTS",
                "SIGNAL",
                "TYPE",
            ],
            (
                [
                    eero.id,
                    eero.location,
                    eero.state.lower(),
                    "yes" if eero.gateway else "no",
                    eero.ip_address,
                    eero.model,
                    str(eero.connected_clients_count),
                    f"{eero.mesh_quality_bars}/{MAX_SIGNAL_BARS}",
                    eero.connection,
                ]
                for eero in eeros
            ),
            print_fn=print_fn,
        )
        print_fn(f"\nTotal: {len(eeros)} eero nodes")


def inspect_eero(query: str, *, print_fn=print) -> None:
    with _open_service("inspect eero") as service:
        network_id = _ensure_network(service)
        eero_id = resolve_eero(service.list_eeros(network_id), query)
        _dump_json(service.get_eero_raw(eero_id), print_fn=print_fn)


def reboot_eero(query: str, *, print_fn=print) -> None:
    with _open_service("reboot eero") as service:
        network_id = _ensure_network(service)
        eeros = service.list_eeros(network_id)
        eero_id = resolve_eero(eeros, query)
        location = next(eero.location for eero in eeros if eero.id == eero_id)
        service.reboot_eero(eero_id)
        print_fn(f"Rebooting eero {eero_id} ({location})...")


def guest_status(*, print_fn=print) -> None:
    with _open_service("guest status") as service:
        network_id = _ensure_network(service)
        guest = service.get_guest_network(network_id)

        print_fn("Guest Network Status")
        print_fn("--------------------")
        print_fn(f"Status:   {'enabled' if guest.enabled else 'disabled'}")
        if guest.name:
            print_fn(f"Name:     {guest.name}")
        if guest.enabled and guest.password:
            print_fn(f"Password: {guest.password}")


def enable_guest(enable: bool = True, *, print_fn=print) -> None:
    with _open_service("toggle guest network") as service:
        network_id = _ensure_network(service)
        service.enable_guest_network(network_id, enable)
        print_fn(f"Guest network has been {'enabled' if enable else 'disabled'}")


def set_guest_password(password: str, *, print_fn=print) -> None:
    with _open_service("set guest password") as service:
        if not password:
            raise ValidationError("a guest network password is required")
        network_id = _ensure_network(service)
        service.set_guest_network_password(network_id, password)
        print_fn("Guest network password has been updated")


def _find_reservation(service: EeroService, network_id: str, query: str) -> str:
    return resolve_reservation(service.list_reservations(network_id), query)


def list_reservations(*, print_fn=print) -> None:
    with _open_service("list reservations") as service:
        network_id = _ensure_network(service)
        reservations = service.list_reservations(network_id)
        _render_table(
            ["IP", "MAC", "DESCRIPTION", "ID"],
            (
                [reservation.ip, reservation.mac, reservation.description, reservation.id]
                for reservation in reservations
            ),
            print_fn=print_fn,
        )


def add_reservation(
    mac: str, ip: str, description: str = "", *, print_fn=print
) -> None:
    with _open_service("add reservation") as service:
        network_id = _ensure_network(service)
        service.create_reservation(network_id, ip, mac, description)
        print_fn(f"Reservation created: {mac} -> {ip}")


def remove_reservation(query: str, *, print_fn=print) -> None:
    with _open_service("remove reservation") as service:
        network_id = _ensure_network(service)
        reservation_id = _find_reservation(service, network_id, query)
        service.delete_reservation(network_id, reservation_id)
        print_fn("Reservation deleted")


def inspect_reservation(query: str, *, print_fn=print) -> None:
    with _open_service("inspect reservation") as service:
        network_id = _ensure_network(service)
        reservation_id = _find_reservation(service, network_id, query)
        _dump_json(
            service.get_reservation_raw(network_id, reservation_id), print_fn=print_fn
        )


def reboot_network(*, assume_yes: bool = False, input_fn=input, print_fn=print) -> None:
    """Reboot every eero on the active network after confirmation."""
    with _open_service("reboot network") as service:
        network_id = _ensure_network(service)
        if not assume_yes and not _confirm(
            "Are you sure you want to reboot the network? "
            "This will disconnect all devices temporarily.",
            input_fn=input_fn,
        ):
            print_fn("Reboot cancelled")
            return

        print_fn("Rebooting network...")
        service.reboot_network(network_id)
        print_fn("Network reboot initiated. Devices will reconnect automatically.")


def _add_filter_arguments(parser: argparse.ArgumentParser, *, nested: bool) -> None:
    # Nested parsers must not overwrite flags already set on "devices".
    default: object = argparse.SUPPRESS if nested else None
    flag_default: object = argparse.SUPPRESS if nested else False
    parser.add_argument(
        "--profile", default=default, help="Filter by profile name or ID."
    )
    flags = [
        ("--noprofile", "no_profile", "Only devices without a profile."),
        ("--wired", "wired", "Only wired devices."),
        ("--wireless", "wireless", "Only wireless devices."),
        ("--online", "online", "Only online devices."),
        ("--offline", "offline", "Only offline devices."),
        ("--guest", "guest", "Only guest network devices."),
        ("--noguest", "no_guest", "Exclude guest network devices."),
        ("--paused", "paused", "Only paused devices."),
        ("--private", "private", "Only devices using a private MAC address."),
    ]
    for flag, dest, help_text in flags:
        parser.add_argument(
            flag, dest=dest, action="store_true", default=flag_default, help=help_text
        )


def _filters_from_args(args: argparse.Namespace) -> DeviceFilters:
    return DeviceFilters(
        profile=getattr(args, "profile", None),
        no_profile=getattr(args, "no_profile", False),
        wired=getattr(args, "wired", False),
        wireless=getattr(args, "wireless", False),
        online=getattr(args, "online", False),
        offline=getattr(args, "offline", False),
        guest=getattr(args, "guest", False),
        no_guest=getattr(args, "no_guest", False),
        paused=getattr(args, "paused", False),
        private=getattr(args, "private", False),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eero-cli", description="Control your eero WiFi network."
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>")

    login_parser = commands.add_parser(
        "login", help="Authenticate with your eero account."
    )
    login_parser.add_argument(
        "--network", help="Network name or ID to use. Defaults to the first one."
    )
    commands.add_parser("logout", help="Clear saved authentication.")
    commands.add_parser("status", help="Show current authentication status.")

    devices = commands.add_parser("devices", help="List and manage devices.")
    _add_filter_arguments(devices, nested=False)
    device_actions = devices.add_subparsers(dest="action", metavar="<action>")
    _add_filter_arguments(
        device_actions.add_parser("list", help="List devices."), nested=True
    )
    monitor = device_actions.add_parser(
        "monitor", help="Watch devices for state changes."
    )
    _add_filter_arguments(monitor, nested=True)
    monitor.add_argument(
        "--interval",
        type=float,
        default=None,
        help=(
            "Seconds between polls (default: %d). Intervals of 25s or more "
            "avoid API rate limits." % settings.monitor_interval
        ),
    )
    for action, help_text in [
        ("pause", "Pause a device's internet access."),
        ("unpause", "Unpause a device."),
        ("block", "Block a device from the network."),
        ("unblock", "Unblock a device."),
        ("inspect", "Print the raw JSON of a device."),
    ]:
        device_actions.add_parser(action, help=help_text).add_argument(
            "device", help="Device ID, ID prefix, MAC or name."
        )
    rename = device_actions.add_parser("rename", help="Set a device's nickname.")
    rename.add_argument("device", help="Device ID, ID prefix, MAC or name.")
    rename.add_argument("name", nargs="+", help="New nickname.")

    profiles = commands.add_parser("profiles", help="List and manage profiles.")
    profile_actions = profiles.add_subparsers(dest="action", metavar="<action>")
    profile_actions.add_parser("list", help="List profiles.")
    for action, help_text in [
        ("inspect", "Print the raw JSON of a profile."),
        ("pause", "Pause a profile."),
        ("unpause", "Unpause a profile."),
    ]:
        profile_actions.add_parser(action, help=help_text).add_argument(
            "profile", help="Profile ID, ID prefix or name."
        )
    for action, help_text in [
        ("add", "Add a device to a profile."),
        ("remove", "Remove a device from a profile."),
    ]:
        membership = profile_actions.add_parser(action, help=help_text)
        membership.add_argument("profile", help="Profile ID, ID prefix or name.")
        membership.add_argument("device", help="Device ID, ID prefix, MAC or name.")

    eeros = commands.add_parser("eeros", help="List and manage eero nodes.")
    eero_actions = eeros.add_subparsers(dest="action", metavar="<action>")
    eero_actions.add_parser("list", help="List eero nodes.")
    for action, help_text in [
        ("inspect", "Print the raw JSON of an eero node."),
        ("reboot", "Reboot a single eero node."),
    ]:
        eero_actions.add_parser(action, help=help_text).add_argument(
            "eero", help="Eero ID, ID prefix, serial or location."
        )

    guest = commands.add_parser("guest", help="Manage the guest network.")
    guest_actions = guest.add_subparsers(dest="action", metavar="<action>")
    guest_actions.add_parser("status", help="Show guest network status.")
    guest_actions.add_parser("enable", help="Enable the guest network.")
    guest_actions.add_parser("disable", help="Disable the guest network.")
    guest_actions.add_parser(
        "password", help="Set the guest network password."
    ).add_argument("password")

    reservations = commands.add_parser(
        "reservations", help="Manage DHCP reservations."
    )
    reservation_actions = reservations.add_subparsers(
        dest="action", metavar="<action>"
    )
    reservation_actions.add_parser("list", help="List reservations.")
    add = reservation_actions.add_parser("add", help="Reserve an IP for a MAC.")
    add.add_argument("mac")
    add.add_argument("ip")
    add.add_argument("description", nargs="*", help="Optional description.")
    for action, help_text in [
        ("remove", "Delete a reservation."),
        ("inspect", "Print the raw JSON of a reservation."),
    ]:
        reservation_actions.add_parser(action, help=help_text).add_argument(
            "reservation", help="Reservation ID, MAC or IP."
        )

    reboot = commands.add_parser("reboot", help="Reboot the whole network.")
    reboot.add_argument(
        "-y", "--yes", action="store_true", help="Skip the confirmation prompt."
    )
    return parser


def _run_devices(args: argparse.Namespace) -> None:
    action = args.action or "list"
    if action == "list":
        list_devices(_filters_from_args(args))
    elif action == "monitor":
        monitor_devices(_filters_from_args(args), interval=args.interval)
    elif action in {"pause", "unpause"}:
        pause_device(args.device, action == "pause")
    elif action in {"block", "unblock"}:
        block_device(args.device, action == "block")
    elif action == "rename":
        rename_device(args.device, " ".join(args.name))
    elif action == "inspect":
        inspect_device(args.device)


def _run_profiles(args: argparse.Namespace) -> None:
    action = args.action or "list"
    if action == "list":
        list_profiles()
    elif action == "inspect":
        inspect_profile(args.profile)
    elif action in {"pause", "unpause"}:
        pause_profile(args.profile, action == "pause")
    elif action == "add":
        add_profile_device(args.profile, args.device)
    elif action == "remove":
        remove_profile_device(args.profile, args.device)


def _run_eeros(args: argparse.Namespace) -> None:
    action = args.action or "list"
    if action == "list":
        list_eeros()
    elif action == "inspect":
        inspect_eero(args.eero)
    elif action == "reboot":
        reboot_eero(args.eero)


def _run_guest(args: argparse.Namespace) -> None:
    action = args.action or "status"
    if action == "status":
        guest_status()
    elif action in {"enable", "disable"}:
        enable_guest(action == "enable")
    elif action == "password":
        set_guest_password(args.password)


def _run_reservations(args: argparse.Namespace) -> None:
    action = args.action or "list"
    if action == "list":
        list_reservations()
    elif action == "add":
        add_reservation(args.mac, args.ip, " ".join(args.description))
    elif action == "remove":
        remove_reservation(args.reservation)
    elif action == "inspect":
        inspect_reservation(args.reservation)


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command is None:
        parser.print_help()
        return
    if args.command == "login":
        login(args.network)
    elif args.command == "logout":
        logout()
    elif args.command == "status":
        status()
    elif args.command == "devices":
        _run_devices(args)
    elif args.command == "profiles":
        _run_profiles(args)
    elif args.command == "eeros":
        _run_eeros(args)
    elif args.command == "guest":
        _run_guest(args)
    elif args.command == "reservations":
        _run_reservations(args)
    elif args.command == "reboot":
        reboot_network(assume_yes=args.yes)


__all__ = [
    "build_parser",
    "list_devices",
    "login",
    "logout",
    "main",
    "monitor_devices",
    "status",
]
