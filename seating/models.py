"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/ and engine/.
"""

import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from seating.domain.lifecycle import EventState
from seating.domain.value_objects import MAX_SEATS, PreferenceRank

EVENT_STATE_CHOICES = [(state.value, state.name.replace("_", " ").title()) for state in EventState]
PREFERENCE_RANK_CHOICES = [(rank.value, rank.name.replace("_", " ").title()) for rank in PreferenceRank]


class Event(models.Model):
    """Persistence model for events."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    state = models.CharField(
        max_length=32,
        choices=EVENT_STATE_CHOICES,
        default=EventState.NOT_OPENED_YET.value,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="seating_event_created_idx"),
        ]

    def __str__(self) -> str:
        return self.name


class Slot(models.Model):
    """Persistence model for slots. ``position`` fixes processing order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="slots")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    position = models.PositiveIntegerField()

    class Meta:
        ordering = ["position"]
        indexes = [
            models.Index(fields=["event", "position"], name="seating_slot_event_pos_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.event.name} - {self.name}"


class Session(models.Model):
    """Persistence model for sessions within a slot."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slot = models.ForeignKey(Slot, on_delete=models.CASCADE, related_name="sessions")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    seats = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(MAX_SEATS)]
    )
    position = models.PositiveIntegerField()

    class Meta:
        ordering = ["position"]
        indexes = [
            models.Index(fields=["slot", "position"], name="seating_session_slot_pos_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.slot.name} - {self.name}"


class Participant(models.Model):
    """Persistence model for event participants."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="participants")
    name = models.CharField(max_length=255, blank=True)
    carried_points = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self) -> str:
        return self.name


class Seat(models.Model):
    """An assigned seat. ``position`` keeps assignment order."""

    session = models.ForeignKey(Session, on_delete=models.CASCADE, related_name="seat_assignments")
    participant = models.ForeignKey(Participant, on_delete=models.CASCADE, related_name="seats")
    position = models.PositiveIntegerField()

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(fields=["session", "participant"], name="unique_seat_per_session"),
        ]


class Application(models.Model):
    """Persistence model for pending applications."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    session = models.ForeignKey(Session, on_delete=models.CASCADE, related_name="applications")
    participant = models.ForeignKey(
        Participant, on_delete=models.CASCADE, related_name="applications"
    )
    rank = models.CharField(max_length=16, choices=PREFERENCE_RANK_CHOICES)
    score = models.IntegerField(blank=True, null=True)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position"]
        constraints = [
            models.UniqueConstraint(
                fields=["session", "participant"], name="unique_application_per_session"
            ),
        ]

    def __str__(self) -> str:
        return f"{self.participant} -> {self.session} ({self.rank})"
