from dataclasses import replace

import click

from metagit.cli.ensure import Ensure
from metagit.cli.output import machine_output, user_output
from metagit.core.context import MetagitContext
from metagit.core.settings import (
    BOOL_FIELDS,
    FLAG_FIELDS,
    INT_FIELDS,
    SETTINGS_FIELDS,
    StatusSettings,
)
from metagit.core.status_flags import (
    ALL_STATUSES,
    NO_STATUSES,
    StatusFlags,
    flag_names,
    parse_flag_names,
)


def _format_flags(flags: StatusFlags) -> str:
    if flags == ALL_STATUSES:
        return "all"
    if flags == NO_STATUSES:
        return "none"
    return ",".join(name.lower() for name in flag_names(flags))


def _format_value(settings: StatusSettings, key: str) -> str:
    value = getattr(settings, key)
    if key in BOOL_FIELDS:
        return str(value).lower()
    if key in FLAG_FIELDS:
        return _format_flags(value)
    return str(value)


def _parse_boolean_value(value: str, field_name: str) -> bool:
    """Parse a boolean value from a string.

    Args:
        value: The string value to parse ("true" or "false", case-insensitive)
        field_name: The name of the field being set (for error messages)

    Returns:
        The parsed boolean value

    Raises:
        SystemExit: If the value is not "true" or "false"
    """
    Ensure.invariant(
        value.lower() in ("true", "false"),
        f"Invalid boolean value for {field_name}: {value}",
    )
    return value.lower() == "true"


def _parse_depth_value(value: str, field_name: str) -> int:
    message = f"Invalid value for {field_name}: {value} (expected an integer >= -1)"
    try:
        depth = int(value)
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + message)
        raise SystemExit(1) from e
    Ensure.invariant(depth >= -1, message)
    return depth


def _parse_flags_value(value: str, field_name: str) -> StatusFlags:
    try:
        return parse_flag_names(value.split(","))
    except ValueError as e:
        user_output(click.style("Error: ", fg="red") + f"Invalid value for {field_name}: {e}")
        raise SystemExit(1) from e


def _update_settings_field(current: StatusSettings, key: str, value: str) -> StatusSettings:
    """Return a new StatusSettings with one field parsed from its string form.

    Raises:
        SystemExit: If the key is unknown or the value cannot be parsed
    """
    if key in BOOL_FIELDS:
        return replace(current, **{key: _parse_boolean_value(value, key)})
    if key in INT_FIELDS:
        return replace(current, **{key: _parse_depth_value(value, key)})
    if key in FLAG_FIELDS:
        return replace(current, **{key: _parse_flags_value(value, key)})

    user_output(click.style("Error: ", fg="red") + f"Invalid config key: {key}")
    raise SystemExit(1)


@click.group("config")
def config_group() -> None:
    """Manage per-repository status settings."""


@config_group.command("list")
@click.pass_obj
def config_list(ctx: MetagitContext) -> None:
    """Print a list of configuration keys and values."""
    Ensure.in_repository(ctx)

    user_output(click.style("Status settings:", bold=True))
    if not ctx.settings_store.exists():
        user_output(f"  (defaults - nothing saved at {ctx.settings_store.path()})")
    for key in SETTINGS_FIELDS:
        user_output(f"  {key}={_format_value(ctx.settings, key)}")


@config_group.command("get")
@click.argument("key", metavar="KEY")
@click.pass_obj
def config_get(ctx: MetagitContext, key: str) -> None:
    """Print the value of a given configuration key."""
    Ensure.in_repository(ctx)
    Ensure.invariant(key in SETTINGS_FIELDS, f"Invalid config key: {key}")
    machine_output(_format_value(ctx.settings, key))


@config_group.command("set")
@click.argument("key", metavar="KEY")
@click.argument("value", metavar="VALUE")
@click.pass_obj
def config_set(ctx: MetagitContext, key: str, value: str) -> None:
    """Update configuration with a value for the given key."""
    Ensure.in_repository(ctx)

    new_settings = _update_settings_field(ctx.settings, key, value)
    ctx.settings_store.save(new_settings)
    user_output(f"Set {key}={_format_value(new_settings, key)}")
