"""Wire schema for the remote flag endpoint (pydantic)"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, JsonValue

from .models import FlagDefinition, KillSwitch, SegmentOverride
from .registry import FlagSnapshot
from .values import FlagValue

_VALUE_ALIASES = AliasChoices("enabledValue", "value", "enabled_value")
_ROLLOUT_ALIASES = AliasChoices("rolloutPercentage", "rollout_percentage")


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class FlagDefinitionModel(_WireModel):
    """A flag as delivered by the remote endpoint. Missing fields fail closed."""

    enabled_value: JsonValue = Field(default=None, validation_alias=_VALUE_ALIASES)
    rollout_percentage: int = Field(default=0, validation_alias=_ROLLOUT_ALIASES)
    description: str = ""

    def to_definition(self, name: str) -> FlagDefinition:
        return FlagDefinition.create(
            name, self.enabled_value, self.rollout_percentage, self.description
        )


class KillSwitchModel(_WireModel):
    active: bool = False
    reason: str = ""
    activated_at: datetime | None = Field(
        default=None, validation_alias=AliasChoices("activatedAt", "activated_at")
    )
    activated_by: str = Field(
        default="remote", validation_alias=AliasChoices("activatedBy", "activated_by")
    )

    def to_kill_switch(self, flag_name: str, fetched_at: datetime) -> KillSwitch:
        return KillSwitch(
            flag_name=flag_name,
            active=self.active,
            reason=self.reason,
            activated_at=self.activated_at or fetched_at,
            activated_by=self.activated_by,
        )


class SegmentPatchModel(_WireModel):
    enabled_value: JsonValue = Field(default=None, validation_alias=_VALUE_ALIASES)
    rollout_percentage: int | None = Field(default=None, validation_alias=_ROLLOUT_ALIASES)
    description: str | None = None

    def to_override(self, segment: str, flag_name: str) -> SegmentOverride:
        value = None
        if "enabled_value" in self.model_fields_set:
            value = FlagValue.of(self.enabled_value)
        return SegmentOverride(
            segment=segment,
            flag_name=flag_name,
            enabled_value=value,
            rollout_percentage=self.rollout_percentage,
            description=self.description,
        )


class FlagPayloadModel(_WireModel):
    """``{flags, killSwitches, segmentOverrides?, version?, serverTime?}``"""

    flags: dict[str, FlagDefinitionModel] = Field(default_factory=dict)
    kill_switches: dict[str, KillSwitchModel] = Field(
        default_factory=dict, validation_alias=AliasChoices("killSwitches", "kill_switches")
    )
    segment_overrides: dict[str, dict[str, SegmentPatchModel]] | None = Field(
        default=None, validation_alias=AliasChoices("segmentOverrides", "segment_overrides")
    )
    version: str | None = None
    server_time: datetime | None = Field(
        default=None, validation_alias=AliasChoices("serverTime", "server_time")
    )

    def apply_to(self, snapshot: FlagSnapshot, fetched_at: datetime | None = None) -> FlagSnapshot:
        """Return a new snapshot whose remote tables come from this payload."""
        fetched_at = fetched_at or datetime.now(timezone.utc)
        overrides = None
        if self.segment_overrides is not None:
            overrides = {
                (segment, flag): patch.to_override(segment, flag)
                for segment, patches in self.segment_overrides.items()
                for flag, patch in patches.items()
            }
        return snapshot.with_remote(
            flags={name: model.to_definition(name) for name, model in self.flags.items()},
            kill_switches={
                name: model.to_kill_switch(name, fetched_at)
                for name, model in self.kill_switches.items()
            },
            segment_overrides=overrides,
            version=self.version,
            fetched_at=fetched_at,
        )


def _definition_to_dict(definition: FlagDefinition) -> dict[str, Any]:
    return {
        "enabledValue": definition.enabled_value.raw,
        "rolloutPercentage": definition.rollout_percentage,
        "description": definition.description,
    }


def _override_to_dict(override: SegmentOverride) -> dict[str, Any]:
    patch: dict[str, Any] = {}
    if override.enabled_value is not None:
        patch["enabledValue"] = override.enabled_value.raw
    if override.rollout_percentage is not None:
        patch["rolloutPercentage"] = override.rollout_percentage
    if override.description is not None:
        patch["description"] = override.description
    return patch


def snapshot_to_payload(snapshot: FlagSnapshot) -> dict[str, Any]:
    """Serialize a snapshot in the shape ``FlagPayloadModel`` reads.

    Remote definitions shadow local ones of the same name.
    """
    flags = {name: _definition_to_dict(f) for name, f in snapshot.local_flags.items()}
    flags.update({name: _definition_to_dict(f) for name, f in snapshot.remote_flags.items()})

    kill_switches = {}
    for name in snapshot.active_kill_switch_names():
        switch = snapshot.kill_switch_for(name)
        if switch is None:
            continue
        kill_switches[name] = {
            "active": True,
            "reason": switch.reason,
            "activatedAt": switch.activated_at.isoformat(),
            "activatedBy": switch.activated_by,
        }

    segment_overrides: dict[str, dict[str, Any]] = {}
    for (segment, flag), override in sorted(snapshot.segment_overrides.items()):
        segment_overrides.setdefault(segment, {})[flag] = _override_to_dict(override)

    return {
        "flags": flags,
        "killSwitches": kill_switches,
        "segmentOverrides": segment_overrides,
        "version": snapshot.version,
    }
