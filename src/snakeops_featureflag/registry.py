"""Copy-on-write flag snapshot and its single-writer registry"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from types import MappingProxyType
from typing import Any

import structlog
from snakeops_telemetry.metrics import kill_switch_changes_total

from .models import FlagDefinition, KillSwitch, SegmentOverride

logger = structlog.get_logger(__name__)

_MAPPING_FIELDS = (
    "local_flags",
    "remote_flags",
    "kill_switches",
    "remote_kill_switches",
    "segment_overrides",
)


@dataclass(frozen=True)
class FlagSnapshot:
    """Immutable view of every flag source at one point in time.

    ``kill_switches`` holds switches activated on this node,
    ``remote_kill_switches`` those delivered by the last remote refresh.
    """

    local_flags: Mapping[str, FlagDefinition] = field(default_factory=dict)
    remote_flags: Mapping[str, FlagDefinition] = field(default_factory=dict)
    kill_switches: Mapping[str, KillSwitch] = field(default_factory=dict)
    remote_kill_switches: Mapping[str, KillSwitch] = field(default_factory=dict)
    segment_overrides: Mapping[tuple[str, str], SegmentOverride] = field(default_factory=dict)
    version: str | None = None
    fetched_at: datetime | None = None

    def __post_init__(self) -> None:
        for name in _MAPPING_FIELDS:
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))

    @classmethod
    def build(
        cls,
        flags: Iterable[FlagDefinition] = (),
        segment_overrides: Iterable[SegmentOverride] = (),
    ) -> FlagSnapshot:
        return cls(
            local_flags={f.name: f for f in flags},
            segment_overrides={(o.segment, o.flag_name): o for o in segment_overrides},
        )

    def kill_switch_for(self, flag_name: str) -> KillSwitch | None:
        """Return the active kill switch for ``flag_name``, if any."""
        for table in (self.kill_switches, self.remote_kill_switches):
            switch = table.get(flag_name)
            if switch is not None and switch.active:
                return switch
        return None

    def definition_for(self, flag_name: str) -> FlagDefinition | None:
        return self.remote_flags.get(flag_name) or self.local_flags.get(flag_name)

    def segment_override_for(self, segment: str, flag_name: str) -> SegmentOverride | None:
        return self.segment_overrides.get((segment, flag_name))

    def flag_names(self) -> list[str]:
        return sorted(set(self.local_flags) | set(self.remote_flags))

    def active_kill_switch_names(self) -> list[str]:
        names = {
            name
            for table in (self.kill_switches, self.remote_kill_switches)
            for name, switch in table.items()
            if switch.active
        }
        return sorted(names)

    def with_remote(
        self,
        flags: Mapping[str, FlagDefinition],
        kill_switches: Mapping[str, KillSwitch],
        segment_overrides: Mapping[tuple[str, str], SegmentOverride] | None = None,
        version: str | None = None,
        fetched_at: datetime | None = None,
    ) -> FlagSnapshot:
        """Replace the remote tables. ``segment_overrides=None`` keeps the current ones."""
        changes: dict[str, Any] = {
            "remote_flags": flags,
            "remote_kill_switches": {n: s for n, s in kill_switches.items() if s.active},
            "version": version,
            "fetched_at": fetched_at,
        }
        if segment_overrides is not None:
            changes["segment_overrides"] = segment_overrides
        return replace(self, **changes)

    def with_local_flag(self, definition: FlagDefinition) -> FlagSnapshot:
        flags = dict(self.local_flags)
        flags[definition.name] = definition
        return replace(self, local_flags=flags)

    def without_local_flag(self, flag_name: str) -> FlagSnapshot:
        flags = {n: f for n, f in self.local_flags.items() if n != flag_name}
        return replace(self, local_flags=flags)

    def with_kill_switch(self, switch: KillSwitch) -> FlagSnapshot:
        switches = dict(self.kill_switches)
        switches[switch.flag_name] = switch
        return replace(self, kill_switches=switches)

    def without_kill_switch(self, flag_name: str) -> FlagSnapshot:
        """Drop the switch from both tables; a remote one returns on the next refresh."""
        return replace(
            self,
            kill_switches={n: s for n, s in self.kill_switches.items() if n != flag_name},
            remote_kill_switches={
                n: s for n, s in self.remote_kill_switches.items() if n != flag_name
            },
        )


class FlagRegistry:
    """Holds the current snapshot. Writers swap whole snapshots; readers never lock."""

    def __init__(self, snapshot: FlagSnapshot | None = None) -> None:
        self._snapshot = snapshot or FlagSnapshot()
        self._write_lock = threading.Lock()

    def snapshot(self) -> FlagSnapshot:
        return self._snapshot

    def swap(self, snapshot: FlagSnapshot) -> None:
        with self._write_lock:
            self._snapshot = snapshot

    def update(self, change: Callable[[FlagSnapshot], FlagSnapshot]) -> FlagSnapshot:
        """Apply ``change`` to the current snapshot and publish the result."""
        with self._write_lock:
            updated = change(self._snapshot)
            self._snapshot = updated
        return updated

    def set_flag(self, flag_name: str, value: Any, description: str = "Manually set flag") -> None:
        definition = FlagDefinition.create(flag_name, value, description=description)
        rollout = 0 if definition.enabled_value.is_off() else 100
        definition = replace(definition, rollout_percentage=rollout)
        self.update(lambda s: s.with_local_flag(definition))
        logger.info("feature flag set", flag=flag_name, rollout_percentage=rollout)

    def remove_flag(self, flag_name: str) -> None:
        self.update(lambda s: s.without_local_flag(flag_name))
        logger.info("feature flag removed", flag=flag_name)

    def activate_kill_switch(
        self,
        flag_name: str,
        reason: str = "Emergency disable",
        activated_by: str = "system",
    ) -> KillSwitch:
        switch = KillSwitch(flag_name=flag_name, reason=reason, activated_by=activated_by)
        self.update(lambda s: s.with_kill_switch(switch))
        kill_switch_changes_total.add(1, {"flag": flag_name, "active": True})
        logger.warning("kill switch activated", flag=flag_name, reason=reason)
        return switch

    def deactivate_kill_switch(self, flag_name: str) -> bool:
        """Returns True if a switch was removed."""
        removed = False

        def change(snapshot: FlagSnapshot) -> FlagSnapshot:
            nonlocal removed
            removed = (
                flag_name in snapshot.kill_switches
                or flag_name in snapshot.remote_kill_switches
            )
            return snapshot.without_kill_switch(flag_name)

        self.update(change)
        if removed:
            kill_switch_changes_total.add(1, {"flag": flag_name, "active": False})
            logger.info("kill switch deactivated", flag=flag_name)
        return removed

    def apply_emergency_kill(self, flag_names: str | Iterable[str]) -> list[str]:
        """Activate kill switches for a comma-separated list (or iterable) of names."""
        if isinstance(flag_names, str):
            flag_names = flag_names.split(",")
        activated = []
        for raw in flag_names:
            name = raw.strip()
            if not name:
                continue
            self.activate_kill_switch(name, reason="Emergency kill list")
            activated.append(name)
        return activated
