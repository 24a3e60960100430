from django.urls import path

from festivals.handlers import (
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

urlpatterns = [
    path("festivals", FestivalListView.as_view(), name="festival-list"),
    path("festivals/<str:slug>", FestivalDetailView.as_view(), name="festival-detail"),
    path("festivals/<str:slug>/schedule", ScheduleView.as_view(), name="festival-schedule"),
    path("my/<str:slug>", MyPlanView.as_view(), name="my-plan"),
    path("my/<str:slug>/planner", PlannerView.as_view(), name="my-planner"),
    path("plan/<str:slug>/toggle", ToggleSetView.as_view(), name="plan-toggle"),
    path("plan/<str:slug>/add", AddSetView.as_view(), name="plan-add"),
    path("plan/<str:slug>/remove", RemoveSetView.as_view(), name="plan-remove"),
    path("ical/<str:plan_id>", CalendarExportView.as_view(), name="plan-ical"),
]
