"""Serializers for transforming domain models to API responses and
validating request payloads."""

from rest_framework import serializers

from festivals.domain.planner import ActionKind
from festivals.domain.timefmt import format_day_label, format_time_range


class FestivalSummarySerializer(serializers.Serializer):
    """Serializer for the festival list."""

    slug = serializers.CharField(source="slug.value")
    name = serializers.CharField()
    city = serializers.CharField()
    country = serializers.CharField()
    start_date = serializers.DateField()
    end_date = serializers.DateField()
    image_url = serializers.CharField(allow_null=True)


class FestivalSerializer(FestivalSummarySerializer):
    """Serializer for Festival domain model."""

    id = serializers.CharField(source="id.value")
    location = serializers.CharField()
    timezone = serializers.CharField()


class StageSerializer(serializers.Serializer):
    """Serializer for Stage domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()


class SetSerializer(serializers.Serializer):
    """Serializer for Set domain model.

    ``time_label`` is rendered in the festival timezone passed through the
    serializer context.
    """

    id = serializers.CharField(source="id.value")
    artist = serializers.CharField()
    stage = serializers.CharField()
    date = serializers.DateField()
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    time_label = serializers.SerializerMethodField()

    def get_time_label(self, obj) -> str:
        tz = self.context.get("timezone", "UTC")
        return format_time_range(obj.start_time, obj.end_time, tz)


class LineupSerializer(serializers.Serializer):
    festival = FestivalSerializer()
    stages = StageSerializer(many=True)
    sets = serializers.SerializerMethodField()

    def get_sets(self, obj) -> list[dict]:
        return SetSerializer(obj.sets, many=True, context={"timezone": obj.festival.timezone}).data


class DaySerializer(serializers.Serializer):
    date = serializers.SerializerMethodField()
    label = serializers.SerializerMethodField()

    def get_date(self, obj) -> str:
        return obj.isoformat()

    def get_label(self, obj) -> str:
        return format_day_label(obj)


def serialize_grouping(grouping, tz: str, selected=frozenset(), conflicts=frozenset()) -> dict:
    """Render stage columns, flagging selected and conflicting sets."""

    def render(sets) -> list[dict]:
        rows = SetSerializer(sets, many=True, context={"timezone": tz}).data
        for row, s in zip(rows, sets):
            row["selected"] = s.id in selected
            row["conflict"] = s.id in conflicts
        return rows

    return {
        "day": grouping.day.isoformat() if grouping.day else None,
        "columns": [{"stage": column.stage, "sets": render(column.sets)} for column in grouping.columns],
        "unplaced": render(grouping.unplaced),
    }


def serialize_planner(view, tz: str) -> dict:
    """Render a planner view: day tabs, the selection per day and stage columns."""
    return {
        "day": view.day.isoformat() if view.day else None,
        "days": [day.isoformat() for day in view.days],
        "selected": sorted(str(set_id) for set_id in view.membership),
        "conflicts": sorted(str(set_id) for set_id in view.conflicts),
        "selected_by_day": {
            day.isoformat(): [str(s.id) for s in sets] for day, sets in view.selected_by_day.items()
        },
        "grouping": serialize_grouping(view.stage_grouping, tz, selected=view.membership, conflicts=view.conflicts),
    }


class ScheduleSerializer(serializers.Serializer):
    festival = FestivalSummarySerializer()
    days = DaySerializer(many=True)
    grouping = serializers.SerializerMethodField()

    def get_grouping(self, obj) -> dict:
        return serialize_grouping(obj.grouping, obj.festival.timezone)


class PlanSerializer(serializers.Serializer):
    """Serializer for Plan domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    created_at = serializers.DateTimeField()


class PlanViewSerializer(serializers.Serializer):
    festival = FestivalSummarySerializer()
    plan = PlanSerializer()
    sets = serializers.SerializerMethodField()
    conflicts = serializers.SerializerMethodField()
    conflict_pairs = serializers.SerializerMethodField()
    ical_url = serializers.SerializerMethodField()
    planner = serializers.SerializerMethodField()

    def get_sets(self, obj) -> list[dict]:
        rows = SetSerializer(obj.sets, many=True, context={"timezone": obj.festival.timezone}).data
        for row, s in zip(rows, obj.sets):
            row["conflict"] = s.id in obj.conflicts
        return rows

    def get_conflicts(self, obj) -> list[str]:
        return sorted(str(set_id) for set_id in obj.conflicts)

    def get_conflict_pairs(self, obj) -> list[list[str]]:
        return [[str(a.id), str(b.id)] for a, b in obj.conflict_pairs]

    def get_ical_url(self, obj) -> str:
        return f"/api/ical/{obj.plan.id}"

    def get_planner(self, obj) -> dict:
        return serialize_planner(obj.planner, obj.festival.timezone)


class MembershipChangeSerializer(serializers.Serializer):
    plan_id = serializers.CharField(source="plan.id.value")
    set_id = serializers.CharField(source="set_id.value")
    selected = serializers.BooleanField()
    set_ids = serializers.SerializerMethodField()
    conflicts = serializers.SerializerMethodField()

    def get_set_ids(self, obj) -> list[str]:
        return sorted(str(set_id) for set_id in obj.set_ids)

    def get_conflicts(self, obj) -> list[str]:
        return sorted(str(set_id) for set_id in obj.conflicts)


# Request payloads


class SetRequestSerializer(serializers.Serializer):
    """Body of toggle/add/remove requests."""

    set_id = serializers.UUIDField()


class PlannerActionRequestSerializer(SetRequestSerializer):
    """Body of a planner action, e.g. a drag-and-drop."""

    action = serializers.ChoiceField(choices=[kind.value for kind in ActionKind])
    stage = serializers.CharField(required=False, allow_blank=False)

    def validate(self, attrs):
        if attrs["action"] == ActionKind.DROP_ON_STAGE.value and not attrs.get("stage"):
            raise serializers.ValidationError({"stage": "This field is required for drop_on_stage."})
        return attrs


class SetListingSerializer(serializers.Serializer):
    """One timetable row of a seed file."""

    name = serializers.CharField(max_length=255)
    date = serializers.DateField()
    startTime = serializers.RegexField(r"^\d{1,2}:\d{2}$")
    endTime = serializers.RegexField(r"^\d{1,2}:\d{2}$")
    stage = serializers.CharField(max_length=100)


class FestivalSeedSerializer(serializers.Serializer):
    """Seed file describing one festival and its lineup."""

    name = serializers.CharField(max_length=255)
    slug = serializers.SlugField(max_length=100)
    startDate = serializers.DateField()
    endDate = serializers.DateField()
    location = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    city = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    country = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    imageUrl = serializers.URLField(max_length=500, required=False, allow_null=True, default=None)
    timezone = serializers.CharField(max_length=64, required=False)
    stages = serializers.ListField(child=serializers.CharField(max_length=100), allow_empty=False)
    sets = SetListingSerializer(many=True)

    def validate(self, attrs):
        if attrs["startDate"] > attrs["endDate"]:
            raise serializers.ValidationError({"endDate": "Must not be before startDate."})
        return attrs
