"""
Assistant Responder

A scripted chat assistant for the guide. There is no language model
here: replies come from an ordered keyword table over the raw input,
first match wins, with canned filler when nothing matches.

GUARANTEES:
- respond() never raises and never returns an empty string
- Trip and payment facts in replies come only from the snapshots passed in
- The only randomness is the filler pick, from an injected random.Random
"""

import random
from typing import Callable, Iterable, NamedTuple, Optional

from guideos.activity import ActivityLogger, get_activity_logger
from guideos.models.activity import ActivityEventBuilder
from guideos.models.payment import Payment
from guideos.models.trip import Trip
from guideos.repositories.payments import display_order, summarize_totals
from guideos.repositories.trips import trip_date_sort_key


NO_TRIPS_REPLY = (
    "You don't have any upcoming trips scheduled. "
    "Head to the Trip Manager to add one!"
)
ALL_PAID_REPLY = "Great news! All your payments are collected. Nothing outstanding."
GEAR_REPLY = (
    "For most trips I'd pack: rods and reels matched to the target species, "
    "spare line and leaders, a tackle box with hooks, weights and lures, "
    "waders or boots, a landing net, rain gear, sunscreen, polarized "
    "sunglasses and a first aid kit."
)
WEATHER_REPLY = (
    "Check the forecast the night before and again at dawn. Overcast days "
    "and the hours around sunrise and sunset usually fish best. Watch for "
    "wind shifts and falling pressure, and always have a plan B if storms "
    "roll in."
)
LOCATION_REPLY = (
    "Good spots depend on the season: try inlets and drop-offs early in the "
    "year, shaded banks and deeper water in summer, and river mouths in the "
    "fall. Always check local regulations and access permits."
)
NO_CLIENTS_REPLY = "You don't have any clients yet. Add a trip to get started!"
HELP_REPLY = (
    "I can help with your next trip, outstanding payments, gear lists, "
    "weather tips, fishing spots and your client list. Just ask!"
)
FALLBACK_REPLIES = (
    "Tight lines! Ask me about your trips, payments or gear.",
    "I'm not sure about that one. Try asking about your schedule or payments.",
    "Interesting! Want me to check your upcoming trips?",
    "I'm here to help with trips, clients and payments. What do you need?",
    "Hmm, let me think... Try 'help' to see what I can do.",
)


class Rule(NamedTuple):
    """One row of the decision table."""

    name: str
    keywords: tuple[str, ...]
    reply: Callable[[list[Trip], list[Payment]], str]


class AssistantResponder:
    """
    Keyword-driven assistant.

    Matching is case-insensitive substring containment on the raw input,
    checked rule by rule in table order.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        client_list_limit: int = 3,
        activity_logger: Optional[ActivityLogger] = None,
    ):
        self._rng = rng or random.Random()
        self._client_list_limit = client_list_limit
        self._activity = activity_logger or get_activity_logger()
        self._rules = (
            Rule("next_trip", ("trip", "schedule"), self._next_trip_reply),
            Rule("payments", ("payment", "money", "paid"), self._payments_reply),
            Rule("gear", ("gear", "equipment"), lambda trips, payments: GEAR_REPLY),
            Rule("weather", ("weather",), lambda trips, payments: WEATHER_REPLY),
            Rule("location", ("location", "spot", "where"), lambda trips, payments: LOCATION_REPLY),
            Rule("clients", ("client",), self._clients_reply),
            Rule("help", ("help",), lambda trips, payments: HELP_REPLY),
        )

    def respond(
        self,
        user_text: str,
        trips: Iterable[Trip],
        payments: Iterable[Payment],
    ) -> str:
        """Reply to `user_text` given the current trips and payments."""
        text = (user_text or "").lower()
        trips = list(trips)
        payments = list(payments)

        for rule in self._rules:
            if any(keyword in text for keyword in rule.keywords):
                self._activity.log(ActivityEventBuilder.assistant_replied(rule.name))
                return rule.reply(trips, payments)

        self._activity.log(ActivityEventBuilder.assistant_replied("fallback"))
        return self._rng.choice(FALLBACK_REPLIES)

    def _next_trip_reply(self, trips: list[Trip], payments: list[Payment]) -> str:
        upcoming = [trip for trip in trips if trip.is_upcoming]
        if not upcoming:
            return NO_TRIPS_REPLY

        # min() keeps the first of equal keys, so ties go to stored order
        next_trip = min(upcoming, key=trip_date_sort_key)
        when = next_trip.date or "a date still to be set"
        reply = f"Your next trip is with {next_trip.client} on {when}"
        if next_trip.location:
            reply += f" at {next_trip.location}"
        return reply + "."

    def _payments_reply(self, trips: list[Trip], payments: list[Payment]) -> str:
        unpaid = display_order(p for p in payments if not p.paid)
        if not unpaid:
            return ALL_PAID_REPLY

        outstanding = summarize_totals(unpaid).total
        noun = "payment" if len(unpaid) == 1 else "payments"
        # "oldest" is the first row of the payment list, which is newest-first
        return (
            f"You have {len(unpaid)} unpaid {noun} totaling ${outstanding:.2f}. "
            f"The oldest is from {unpaid[0].client}."
        )

    def _clients_reply(self, trips: list[Trip], payments: list[Payment]) -> str:
        clients: list[str] = []
        for trip in trips:
            if trip.client and trip.client not in clients:
                clients.append(trip.client)
            if len(clients) == self._client_list_limit:
                break

        if not clients:
            return NO_CLIENTS_REPLY
        return f"Your recent clients include: {', '.join(clients)}."


_default_responder: Optional[AssistantResponder] = None


def respond(user_text: str, trips: Iterable[Trip], payments: Iterable[Payment]) -> str:
    """Module-level shortcut using a shared responder."""
    global _default_responder
    if _default_responder is None:
        _default_responder = AssistantResponder()
    return _default_responder.respond(user_text, trips, payments)
