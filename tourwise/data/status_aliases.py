"""Legacy booking-status strings found in older tour data.

Earlier data versions used overlapping vocabularies (``proposed``,
``requested``, ``booked`` ...). Each alias maps onto one value of the current
status set. Extend this dict when new legacy values show up in imports.
"""

LEGACY_STATUS_ALIASES: dict[str, str] = {
    # planning phase
    "proposed": "potential",
    "planning": "potential",
    "planned": "potential",
    "requested": "suggested",
    "recommended": "suggested",
    # contact phase
    "pending": "contacted",
    "outreach": "contacted",
    "in_negotiation": "negotiating",
    "negotiation": "negotiating",
    # holds
    "hold": "hold4",
    "on_hold": "hold4",
    "hold_1": "hold1",
    "hold_2": "hold2",
    "hold_3": "hold3",
    "hold_4": "hold4",
    "first_hold": "hold1",
    "second_hold": "hold2",
    "third_hold": "hold3",
    "fourth_hold": "hold4",
    # final
    "booked": "confirmed",
    "canceled": "cancelled",
    "rejected": "cancelled",
}
