"""Assistant agents package."""

from guideos.agents.assistant import (
    FALLBACK_REPLIES,
    NO_TRIPS_REPLY,
    AssistantResponder,
    respond,
)
from guideos.agents.chat import ChatMessage, ChatSession, Sender
from guideos.agents.planner import (
    PlannerAnswers,
    PlannerStep,
    TripPlannerAgent,
    build_trip_summary,
)

__all__ = [
    "FALLBACK_REPLIES",
    "NO_TRIPS_REPLY",
    "AssistantResponder",
    "respond",
    "ChatMessage",
    "ChatSession",
    "Sender",
    "PlannerAnswers",
    "PlannerStep",
    "TripPlannerAgent",
    "build_trip_summary",
]
