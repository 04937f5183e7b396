"""
Application Wiring for GuideOS

Builds the store, repositories and assistant from settings and hands
them to the presentation layer as one bundle.

Every view gets the same RecordStore, so a save made from any view
reaches every other view through the store's change signal.
"""

import random
from pathlib import Path
from typing import Optional

from guideos.activity import ActivityLogger, configure_logging
from guideos.agents import AssistantResponder, ChatSession, TripPlannerAgent
from guideos.config import StorageBackend, get_settings
from guideos.repositories import PaymentRepository, TripRepository
from guideos.services.storage import (
    InMemoryBackend,
    JsonFileBackend,
    KeyValueBackend,
    RecordStore,
)


class AppComponents:
    """Everything a view needs, sharing one store."""

    def __init__(
        self,
        store: RecordStore,
        trips: TripRepository,
        payments: PaymentRepository,
        responder: AssistantResponder,
        rng: random.Random,
    ):
        self.store = store
        self.trips = trips
        self.payments = payments
        self.responder = responder
        self._rng = rng

    def new_chat(self) -> ChatSession:
        """Open a chat transcript using the configured typing delay."""
        assistant = get_settings().assistant
        return ChatSession(
            responder=self.responder,
            rng=self._rng,
            delay_range=(assistant.typing_delay_min, assistant.typing_delay_max),
            activity_logger=self.store.activity_logger,
        )

    def new_planner(self) -> TripPlannerAgent:
        return TripPlannerAgent(self.trips)

    def ask(self, question: str) -> str:
        """Answer from the current trip and payment collections, no delay."""
        return self.responder.respond(
            question,
            self.trips.list_trips(),
            self.payments.list_payments(),
        )


def create_backend(
    backend: Optional[StorageBackend] = None,
    data_dir: Optional[Path] = None,
) -> KeyValueBackend:
    """Backend selected by settings, overridable per call."""
    storage = get_settings().storage
    backend = backend or storage.backend

    if backend is StorageBackend.MEMORY:
        return InMemoryBackend()
    return JsonFileBackend(
        data_dir or storage.data_dir,
        write_attempts=storage.write_attempts,
    )


def create_app_components(
    backend: Optional[KeyValueBackend] = None,
    rng: Optional[random.Random] = None,
    setup_logging: bool = True,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        backend: Storage backend to use. Defaults to the one configured
                 in StorageSettings.
        rng: Random source for the assistant's filler replies and typing
             delay. Pass a seeded Random for reproducible sessions.
        setup_logging: Configure stdlib logging from AppSettings.log_level.

    Returns:
        AppComponents sharing a single RecordStore
    """
    settings = get_settings()
    if setup_logging:
        app = settings.app
        configure_logging("DEBUG" if app.debug_mode else app.log_level)

    storage = settings.storage
    activity_logger = ActivityLogger()
    store = RecordStore(backend or create_backend(), activity_logger=activity_logger)
    rng = rng or random.Random()

    return AppComponents(
        store=store,
        trips=TripRepository(store, key=storage.trips_key),
        payments=PaymentRepository(store, key=storage.payments_key),
        responder=AssistantResponder(
            rng=rng,
            client_list_limit=settings.assistant.client_list_limit,
            activity_logger=activity_logger,
        ),
        rng=rng,
    )
