"""
Chat Session

The assistant transcript. A reply is appended after a short, random
"typing" delay. The delay is cosmetic and cannot be cancelled; if the
session is closed while it runs, the reply is dropped.

Both the sleep function and the random source are injected, so tests
run without real time or real randomness.
"""

import asyncio
import random
from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional

from pydantic import BaseModel

from guideos.activity import ActivityLogger, get_activity_logger
from guideos.agents.assistant import AssistantResponder
from guideos.models.activity import ActivityEventBuilder
from guideos.models.payment import Payment
from guideos.models.trip import Trip


CHAT_GREETING = (
    "Hi! I'm your guide assistant. Ask me about your trips, payments, "
    "gear or the weather."
)


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "ai"


class ChatMessage(BaseModel):
    sender: Sender
    text: str


Sleep = Callable[[float], Awaitable[None]]


class ChatSession:
    """An open assistant transcript."""

    def __init__(
        self,
        responder: AssistantResponder,
        rng: Optional[random.Random] = None,
        sleep: Sleep = asyncio.sleep,
        delay_range: tuple[float, float] = (0.8, 1.6),
        activity_logger: Optional[ActivityLogger] = None,
    ):
        low, high = delay_range
        if low < 0 or high < low:
            raise ValueError(f"Invalid delay range: {delay_range}")

        self._responder = responder
        self._rng = rng or random.Random()
        self._sleep = sleep
        self._delay_range = (low, high)
        self._activity = activity_logger or get_activity_logger()
        self._messages = [ChatMessage(sender=Sender.ASSISTANT, text=CHAT_GREETING)]
        self._closed = False

    @property
    def messages(self) -> list[ChatMessage]:
        """A copy of the transcript so far."""
        return list(self._messages)

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Tear the session down. Pending replies will be dropped."""
        self._closed = True

    def next_delay(self) -> float:
        low, high = self._delay_range
        return self._rng.uniform(low, high)

    async def send(
        self,
        text: str,
        trips: Iterable[Trip],
        payments: Iterable[Payment],
    ) -> Optional[str]:
        """
        Post a user message and, after the typing delay, the reply.

        Returns:
            The reply, or None if the input was blank or the session was
            closed before the reply could be delivered
        """
        if self._closed or not (text or "").strip():
            return None

        self._messages.append(ChatMessage(sender=Sender.USER, text=text))
        # computed from the data as it was at send time
        reply = self._responder.respond(text, trips, payments)

        await self._sleep(self.next_delay())

        if self._closed:
            self._activity.log(ActivityEventBuilder.assistant_reply_dropped())
            return None

        self._messages.append(ChatMessage(sender=Sender.ASSISTANT, text=reply))
        return reply
