"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.conf import settings
from django.db import models


class Festival(models.Model):
    """Persistence model for festivals."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=100, unique=True)
    name = models.CharField(max_length=255)
    start_date = models.DateField()
    end_date = models.DateField()
    location = models.CharField(max_length=255, blank=True, default="")
    city = models.CharField(max_length=100, blank=True, default="")
    country = models.CharField(max_length=100, blank=True, default="")
    image_url = models.URLField(max_length=500, blank=True, null=True)
    timezone = models.CharField(max_length=64, default="UTC")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["start_date", "name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_date__lte=models.F("end_date")),
                name="festival_dates_ordered",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class Stage(models.Model):
    """Persistence model for festival stages."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    festival = models.ForeignKey(Festival, on_delete=models.CASCADE, related_name="stages")
    name = models.CharField(max_length=100)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "name"]
        constraints = [
            models.UniqueConstraint(fields=["festival", "name"], name="unique_stage_per_festival"),
        ]

    def __str__(self) -> str:
        return f"{self.festival.name} - {self.name}"


class Set(models.Model):
    """Persistence model for an artist performance."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    festival = models.ForeignKey(Festival, on_delete=models.CASCADE, related_name="sets")
    stage = models.ForeignKey(Stage, on_delete=models.CASCADE, related_name="sets")
    artist = models.CharField(max_length=255)
    date = models.DateField()
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()

    class Meta:
        ordering = ["start_time"]
        indexes = [
            models.Index(fields=["festival", "date"], name="set_festival_date_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_time__lt=models.F("end_time")),
                name="set_starts_before_end",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.artist} @ {self.stage.name}"


class Plan(models.Model):
    """Persistence model for a user's plan on one festival."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="festival_plans")
    festival = models.ForeignKey(Festival, on_delete=models.CASCADE, related_name="plans")
    name = models.CharField(max_length=100, default="My Plan")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "festival"], name="unique_plan_per_user_festival"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.festival.name})"


class PlanItem(models.Model):
    """Persistence model linking a plan to a set."""

    plan = models.ForeignKey(Plan, on_delete=models.CASCADE, related_name="items")
    set = models.ForeignKey(Set, on_delete=models.CASCADE, related_name="plan_items")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["plan", "set"], name="unique_set_per_plan"),
        ]

    def __str__(self) -> str:
        return f"{self.plan_id} - {self.set_id}"
