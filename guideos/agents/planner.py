"""
Trip Planner

The guided three-question conversation from the assistant tab:
location, then gear, then client type. The answers produce a trip prep
summary and can be turned into an unscheduled trip draft.
"""

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel

from guideos.models.trip import Trip
from guideos.repositories.trips import TripRepository


GREETING = "🎣 Plan my next trip! What location are you thinking about?"
ASK_GEAR = "Great choice! What gear will you need for this trip?"
ASK_CLIENT_TYPE = (
    "Perfect! What type of client is this trip for? "
    "(beginner, experienced, family, etc.)"
)
DRAFT_CREATED = (
    "✅ Trip draft created! You can find it in the Trip Manager "
    "to add date and client details."
)
DRAFT_FAILED = "Sorry, the trip draft could not be saved. Please try again."

INPUT_HINTS = {
    0: "e.g., Lake Tahoe",
    1: "e.g., rods, bait, waders",
    2: "e.g., beginner, family group",
}


class PlannerStep(IntEnum):
    LOCATION = 0
    GEAR = 1
    CLIENT_TYPE = 2
    DONE = 3


class PlannerAnswers(BaseModel):
    location: str = ""
    gear: str = ""
    client_type: str = ""


def build_trip_summary(answers: PlannerAnswers) -> str:
    """Pre-trip summary and checklist for the planner's answers."""
    return f"""**🎯 Trip Prep Summary**

**📍 Location:** {answers.location}
**🎒 Gear Needed:** {answers.gear}
**👥 Client Type:** {answers.client_type}

**⏰ Pre-Trip Checklist:**
• Check weather conditions for {answers.location}
• Prepare gear: {answers.gear}
• Review safety protocols for {answers.client_type} clients
• Confirm meeting time and location
• Check licenses and permits
• Pack first aid kit and emergency contacts

**💡 Pro Tips:**
• Arrive 30 minutes early to set up
• Bring backup gear for {answers.client_type} clients
• Check local regulations for {answers.location}
• Have a backup plan for weather changes

**📱 Don't Forget:**
• Charge phone and GPS devices
• Bring cash for tips/emergencies
• Update client on any last-minute changes

Have an amazing trip! 🌟"""


class TripPlannerAgent:
    """
    Step-by-step trip planner.

    BOUNDARIES:
    - Saves nothing until create_draft() is called after the last answer
    - The draft has no date; the guide schedules it in the Trip Manager
    """

    def __init__(self, trips: TripRepository):
        self._trips = trips
        self.reset()

    def reset(self) -> str:
        """Start over. Returns the greeting."""
        self._step = PlannerStep.LOCATION
        self._answers = PlannerAnswers()
        self._draft: Optional[Trip] = None
        return GREETING

    @property
    def step(self) -> PlannerStep:
        return self._step

    @property
    def answers(self) -> PlannerAnswers:
        return self._answers

    @property
    def is_complete(self) -> bool:
        return self._step is PlannerStep.DONE

    @property
    def input_hint(self) -> Optional[str]:
        """Placeholder text for the next answer, None once complete."""
        return INPUT_HINTS.get(int(self._step))

    def answer(self, text: str) -> Optional[str]:
        """
        Record the answer to the current question.

        Returns:
            The planner's next message, or None if the answer was blank
            or the conversation is already complete
        """
        text = (text or "").strip()
        if not text or self.is_complete:
            return None

        if self._step is PlannerStep.LOCATION:
            self._answers.location = text
            self._step = PlannerStep.GEAR
            return ASK_GEAR

        if self._step is PlannerStep.GEAR:
            self._answers.gear = text
            self._step = PlannerStep.CLIENT_TYPE
            return ASK_CLIENT_TYPE

        self._answers.client_type = text
        self._step = PlannerStep.DONE
        return build_trip_summary(self._answers)

    def create_draft(self) -> Optional[str]:
        """
        Save the planned trip as an unscheduled draft.

        Returns:
            The confirmation message, or None if the planner isn't done
        """
        if not self.is_complete:
            return None
        if self._draft is not None:
            return DRAFT_CREATED

        client_type = self._answers.client_type
        draft = self._trips.add_draft(
            client=f"{client_type} client",
            location=self._answers.location,
            gear=self._answers.gear,
            notes=f"AI-generated trip for {client_type} client",
        )
        if draft is None:
            return DRAFT_FAILED

        self._draft = draft
        return DRAFT_CREATED

    @property
    def draft(self) -> Optional[Trip]:
        """The draft saved by create_draft, if any."""
        return self._draft
