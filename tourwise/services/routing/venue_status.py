"""Venue status machine — booking lifecycle of a single tour stop.

Phases, in forward order:
    planning     potential, suggested
    contact      contacted, negotiating
    hold         hold1 .. hold4   (hold1 = highest priority, closest to confirmation)
    final        confirmed, cancelled   (terminal)

Rules:
  - any non-terminal status may be cancelled
  - forward moves may skip phases (potential → confirmed is fine)
  - a hold may be promoted (hold3 → hold1) or confirmed; demotion to a
    lower-priority hold needs allow_demotion=True
  - nothing leaves confirmed or cancelled
"""

import logging
from datetime import datetime, timezone
from enum import Enum

from tourwise.data.status_aliases import LEGACY_STATUS_ALIASES
from tourwise.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class VenueStatus(str, Enum):
    POTENTIAL = "potential"
    SUGGESTED = "suggested"
    CONTACTED = "contacted"
    NEGOTIATING = "negotiating"
    HOLD1 = "hold1"
    HOLD2 = "hold2"
    HOLD3 = "hold3"
    HOLD4 = "hold4"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class StatusPhase(str, Enum):
    PLANNING = "planning"
    CONTACT = "contact"
    HOLD = "hold"
    FINAL = "final"


PHASES: dict[VenueStatus, StatusPhase] = {
    VenueStatus.POTENTIAL: StatusPhase.PLANNING,
    VenueStatus.SUGGESTED: StatusPhase.PLANNING,
    VenueStatus.CONTACTED: StatusPhase.CONTACT,
    VenueStatus.NEGOTIATING: StatusPhase.CONTACT,
    VenueStatus.HOLD1: StatusPhase.HOLD,
    VenueStatus.HOLD2: StatusPhase.HOLD,
    VenueStatus.HOLD3: StatusPhase.HOLD,
    VenueStatus.HOLD4: StatusPhase.HOLD,
    VenueStatus.CONFIRMED: StatusPhase.FINAL,
    VenueStatus.CANCELLED: StatusPhase.FINAL,
}

TERMINAL_STATUSES = frozenset({VenueStatus.CONFIRMED, VenueStatus.CANCELLED})

HOLD_LEVELS: dict[VenueStatus, int] = {
    VenueStatus.HOLD1: 1,
    VenueStatus.HOLD2: 2,
    VenueStatus.HOLD3: 3,
    VenueStatus.HOLD4: 4,
}

# Total order over non-terminal bookings, 1 = closest to confirmation.
PRIORITY_ORDER: tuple[VenueStatus, ...] = (
    VenueStatus.HOLD1,
    VenueStatus.HOLD2,
    VenueStatus.HOLD3,
    VenueStatus.HOLD4,
    VenueStatus.NEGOTIATING,
    VenueStatus.CONTACTED,
    VenueStatus.SUGGESTED,
    VenueStatus.POTENTIAL,
)

# Detour thresholds (percent of added distance) → recommended booking priority.
DETOUR_PRIORITY_BANDS: tuple[tuple[float, VenueStatus], ...] = (
    (10.0, VenueStatus.HOLD1),
    (20.0, VenueStatus.HOLD2),
    (40.0, VenueStatus.HOLD3),
    (100.0, VenueStatus.HOLD4),
)


def _build_transitions() -> dict[VenueStatus, frozenset[VenueStatus]]:
    """Exhaustive table of moves that need no extra permission."""
    forward_order = list(VenueStatus)[:-1]  # cancelled is not a forward target
    table: dict[VenueStatus, frozenset[VenueStatus]] = {}
    for status in VenueStatus:
        if status in TERMINAL_STATUSES:
            table[status] = frozenset()
            continue

        allowed = {VenueStatus.CANCELLED, VenueStatus.CONFIRMED}
        if status in HOLD_LEVELS:
            level = HOLD_LEVELS[status]
            allowed |= {s for s, lvl in HOLD_LEVELS.items() if lvl < level}
        else:
            position = forward_order.index(status)
            allowed |= set(forward_order[position + 1:])
        table[status] = frozenset(allowed)
    return table


TRANSITIONS: dict[VenueStatus, frozenset[VenueStatus]] = _build_transitions()


def parse_status(raw) -> VenueStatus:
    """Coerce a status value (enum, current string or legacy alias) to VenueStatus."""
    if isinstance(raw, VenueStatus):
        return raw
    if raw is None:
        raise ValueError("Status is required")

    key = str(raw).strip().lower().replace("-", "_").replace(" ", "_")
    key = LEGACY_STATUS_ALIASES.get(key, key)
    try:
        return VenueStatus(key)
    except ValueError:
        raise ValueError(f"Unknown venue status: {raw!r}") from None


def is_terminal(status: VenueStatus) -> bool:
    return parse_status(status) in TERMINAL_STATUSES


def hold_level(status: VenueStatus) -> int | None:
    """1-4 for holds, None otherwise."""
    return HOLD_LEVELS.get(parse_status(status))


def priority_rank(status: VenueStatus) -> int:
    """Position in PRIORITY_ORDER (0 = hold1). Terminal statuses sort last."""
    status = parse_status(status)
    if status in TERMINAL_STATUSES:
        return len(PRIORITY_ORDER)
    return PRIORITY_ORDER.index(status)


def is_provisional(status: VenueStatus) -> bool:
    """Booked in some form but not confirmed; these never anchor a gap."""
    return parse_status(status) not in TERMINAL_STATUSES


def can_transition(current, requested, allow_demotion: bool = False) -> bool:
    try:
        transition_status(current, requested, allow_demotion=allow_demotion)
    except InvalidTransitionError:
        return False
    return True


def transition_status(current, requested, allow_demotion: bool = False) -> VenueStatus:
    """Validate a status change and return the new status.

    Requesting the current non-terminal status is a no-op. Raises
    InvalidTransitionError for anything the transition table does not allow.
    """
    current = parse_status(current)
    requested = parse_status(requested)

    if current in TERMINAL_STATUSES:
        raise InvalidTransitionError(current, requested, f"{current.value} is terminal")

    if requested == current:
        return current

    if requested in TRANSITIONS[current]:
        return requested

    if allow_demotion and current in HOLD_LEVELS and requested in HOLD_LEVELS:
        return requested

    if current in HOLD_LEVELS and requested in HOLD_LEVELS:
        reason = "hold demotion must be explicit"
    else:
        reason = "backward move"
    raise InvalidTransitionError(current, requested, reason)


def apply_status(stop, requested, now: datetime | None = None, allow_demotion: bool = False):
    """Return a copy of ``stop`` with the new status and a fresh status_updated_at.

    The input stop is left untouched. An unchanged status keeps its timestamp.
    """
    new_status = transition_status(stop.status, requested, allow_demotion=allow_demotion)
    if new_status == stop.status:
        return stop.model_copy()

    stamped_at = now or datetime.now(timezone.utc)
    logger.debug(f"Stop {stop.id}: {stop.status.value} -> {new_status.value}")
    return stop.model_copy(update={"status": new_status, "status_updated_at": stamped_at})


def status_for_detour(deviation_percent: float) -> VenueStatus:
    """Recommended booking priority for a gap filler given its added-distance percentage."""
    for upper, status in DETOUR_PRIORITY_BANDS:
        if deviation_percent < upper:
            return status
    return VenueStatus.POTENTIAL
