"""Caller identity configuration for command-line use."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from stockroom.domain.model import CallerIdentity, Role, scope_from_values

from .env import optional_env_var
from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stockroom.domain.model import VendorScope

DEFAULT_ROLE = Role.STAFF


@dataclass(frozen=True, slots=True)
class CallerConfig:
    role: Role
    scope: VendorScope
    name: str | None = None

    def identity(self) -> CallerIdentity:
        return CallerIdentity(role=self.role, scope=self.scope, name=self.name)


def parse_role(value: str) -> Role:
    try:
        return Role(value.strip().lower())
    except ValueError as exc:
        choices = ", ".join(role.value for role in Role)
        raise ConfigurationError(f"Unknown role {value!r}; expected one of: {choices}") from exc


def get_caller_config(
    *,
    role: str | None = None,
    vendor_numbers: Sequence[str] | None = None,
    name: str | None = None,
) -> CallerConfig:
    """Resolve the caller from explicit overrides, then the environment.

    ``STOCKROOM_VENDOR_NUMBERS`` is comma-separated; ``ALL`` grants every vendor.
    Without it, unrestricted roles get every vendor and the vendor role gets none.
    """

    resolved_role = parse_role(role) if role else None
    if resolved_role is None:
        env_role = optional_env_var("STOCKROOM_ROLE")
        resolved_role = parse_role(env_role) if env_role else DEFAULT_ROLE

    values: Sequence[str] | None = vendor_numbers
    if not values:
        env_vendors = optional_env_var("STOCKROOM_VENDOR_NUMBERS")
        values = env_vendors.split(",") if env_vendors else None
    if values:
        scope = scope_from_values(values)
    else:
        scope = scope_from_values([] if resolved_role is Role.VENDOR else ["ALL"])

    return CallerConfig(
        role=resolved_role,
        scope=scope,
        name=name or optional_env_var("STOCKROOM_USER"),
    )
