from festivals.handlers.views import (
    AddSetView,
    CalendarExportView,
    FestivalDetailView,
    FestivalListView,
    MyPlanView,
    PlannerView,
    RemoveSetView,
    ScheduleView,
    ToggleSetView,
)

__all__ = [
    "FestivalListView",
    "FestivalDetailView",
    "ScheduleView",
    "MyPlanView",
    "PlannerView",
    "ToggleSetView",
    "AddSetView",
    "RemoveSetView",
    "CalendarExportView",
]
