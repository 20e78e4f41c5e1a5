"""Default flag catalog of the live game"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone

from .models import FlagDefinition, Segment, SegmentOverride
from .registry import FlagSnapshot

WEEKEND_BONUS_XP = "WEEKEND_BONUS_XP"
HAPPY_HOUR_REWARDS = "HAPPY_HOUR_REWARDS"

# UTC hours, inclusive
HAPPY_HOUR_START = 18
HAPPY_HOUR_END = 22

DEFAULT_FLAGS: tuple[FlagDefinition, ...] = (
    FlagDefinition.create("BATTLE_PASS_ENABLED", True, 100, "Enable Battle Pass system"),
    FlagDefinition.create("BATTLE_PASS_AUTO_CLAIM", False, 0, "Auto-claim Battle Pass rewards"),
    FlagDefinition.create("CLAN_WARS_ENABLED", True, 100, "Enable Clan Wars feature"),
    FlagDefinition.create("CLAN_CHAT_ENABLED", True, 90, "Enable clan chat system"),
    FlagDefinition.create("CLAN_GHOST_REPLAYS", True, 60, "Enable ghost replay system"),
    FlagDefinition.create("PREMIUM_OFFERS_V2", True, 15, "New premium offers system"),
    FlagDefinition.create("DYNAMIC_PRICING", False, 0, "Dynamic pricing based on player segments"),
    FlagDefinition.create("VIP_SUBSCRIPTION", True, 10, "VIP monthly subscription"),
    FlagDefinition.create("WEB_WORKERS", True, 50, "Use Web Workers for heavy processing"),
    FlagDefinition.create("LAZY_LOADING", True, 100, "Lazy load non-critical features"),
    FlagDefinition.create("AI_DIFFICULTY_SCALING", True, 2, "AI-based difficulty adjustment"),
    FlagDefinition.create("MULTIPLAYER_MODE", False, 0, "Real-time multiplayer"),
    FlagDefinition.create("SOCIAL_SHARING_V2", True, 30, "Enhanced social sharing"),
    FlagDefinition.create("FRIEND_CHALLENGES", True, 5, "Friend challenge system"),
    FlagDefinition.create("ENHANCED_ANTI_CHEAT", True, 100, "Enhanced anti-cheat validation"),
    FlagDefinition.create("REAL_TIME_VALIDATION", True, 40, "Real-time server validation"),
    FlagDefinition.create("BEHAVIORAL_ANALYTICS", True, 90, "Advanced behavioral tracking"),
    FlagDefinition.create("UI_REDESIGN_V2", False, 5, "New UI design system"),
)

# whales see premium features first, minnows get social features first
DEFAULT_SEGMENT_OVERRIDES: tuple[SegmentOverride, ...] = (
    SegmentOverride(Segment.WHALE, "VIP_SUBSCRIPTION", rollout_percentage=100),
    SegmentOverride(Segment.WHALE, "PREMIUM_OFFERS_V2", rollout_percentage=100),
    SegmentOverride(Segment.WHALE, "AI_DIFFICULTY_SCALING", rollout_percentage=50),
    SegmentOverride(Segment.DOLPHIN, "VIP_SUBSCRIPTION", rollout_percentage=30),
    SegmentOverride(Segment.DOLPHIN, "PREMIUM_OFFERS_V2", rollout_percentage=50),
    SegmentOverride(Segment.MINNOW, "SOCIAL_SHARING_V2", rollout_percentage=80),
    SegmentOverride(Segment.MINNOW, "FRIEND_CHALLENGES", rollout_percentage=20),
)


def is_weekend(now: datetime) -> bool:
    return now.astimezone(timezone.utc).weekday() >= 5


def is_happy_hour(now: datetime) -> bool:
    return HAPPY_HOUR_START <= now.astimezone(timezone.utc).hour <= HAPPY_HOUR_END


def time_based_flags(now: datetime | None = None) -> tuple[FlagDefinition, ...]:
    """Flags whose value follows the UTC clock. Rollout is always 100."""
    now = now or datetime.now(timezone.utc)
    return (
        FlagDefinition.create(WEEKEND_BONUS_XP, is_weekend(now), 100, "Weekend bonus XP multiplier"),
        FlagDefinition.create(
            HAPPY_HOUR_REWARDS, is_happy_hour(now), 100, "Happy hour increased rewards"
        ),
    )


def with_time_based_flags(snapshot: FlagSnapshot, now: datetime | None = None) -> FlagSnapshot:
    """Re-evaluate the clock-driven flags present in ``snapshot``.

    Only boolean local definitions are touched, so an operator who pinned one
    of them to another value keeps it. Returns ``snapshot`` itself when
    nothing changed.
    """
    for current in time_based_flags(now):
        existing = snapshot.local_flags.get(current.name)
        if existing is None or not isinstance(existing.enabled_value.raw, bool):
            continue
        if existing.enabled_value == current.enabled_value:
            continue
        snapshot = snapshot.with_local_flag(replace(existing, enabled_value=current.enabled_value))
    return snapshot


def default_snapshot(now: datetime | None = None) -> FlagSnapshot:
    return FlagSnapshot.build(DEFAULT_FLAGS + time_based_flags(now), DEFAULT_SEGMENT_OVERRIDES)
