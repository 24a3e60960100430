"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.core.cache import cache
from django.db import DatabaseError
from django.http import HttpResponse
from loguru import logger
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from festivals.cache_keys import (
    FESTIVAL_LIST_KEY,
    festival_key,
    plan_index_key,
    plan_key,
    schedule_index_key,
    schedule_key,
)
from festivals.domain.errors import DomainError, ErrorCode
from festivals.domain.planner import ActionKind
from festivals.handlers.serializers import (
    FestivalSummarySerializer,
    LineupSerializer,
    MembershipChangeSerializer,
    PlannerActionRequestSerializer,
    PlanViewSerializer,
    ScheduleSerializer,
    SetRequestSerializer,
    serialize_planner,
)
from festivals.page_cache import cache_page
from festivals.services import CalendarService, FestivalService, PlanService
from festivals.services.calendar_service import CONTENT_TYPE
from festivals.services.festival_service import parse_day
from festivals.stores.django_store import DjangoFestivalStore, DjangoPlanStore

ERROR_STATUS = {
    ErrorCode.FESTIVAL_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.SET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PLAN_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_FESTIVAL_SLUG: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_SET_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PLAN_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DAY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SEED_VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CALENDAR_EXPORT_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(err: DomainError) -> Response:
    return Response(
        {"error": {"code": err.code.value, "message": err.message}},
        status=ERROR_STATUS.get(err.code, status.HTTP_400_BAD_REQUEST),
    )


def validation_error_response(errors) -> Response:
    return Response(
        {"error": {"code": "VALIDATION_ERROR", "message": "Invalid request", "details": errors}},
        status=status.HTTP_400_BAD_REQUEST,
    )


def festival_service() -> FestivalService:
    return FestivalService(DjangoFestivalStore())


def plan_service() -> PlanService:
    return PlanService(
        DjangoFestivalStore(),
        DjangoPlanStore(),
        default_plan_name=settings.FESTIVALS["DEFAULT_PLAN_NAME"],
    )


def calendar_service() -> CalendarService:
    return CalendarService(DjangoFestivalStore(), DjangoPlanStore())


def cache_timeout() -> int:
    return settings.FESTIVALS["CACHE_TIMEOUT"]


class FestivalListView(APIView):
    """Handler for GET /api/festivals"""

    def get(self, request: Request) -> Response:
        data = cache.get(FESTIVAL_LIST_KEY)
        if data is None:
            try:
                festivals = festival_service().list_festivals()
            except DatabaseError as exc:
                # The listing degrades to empty rather than failing the page.
                logger.warning(f"Festival listing unavailable: {exc}")
                return Response([])
            data = FestivalSummarySerializer(festivals, many=True).data
            cache.set(FESTIVAL_LIST_KEY, data, cache_timeout())
        return Response(data)


class FestivalDetailView(APIView):
    """Handler for GET /api/festivals/{slug}"""

    def get(self, request: Request, slug: str) -> Response:
        key = festival_key(slug)
        data = cache.get(key)
        if data is None:
            try:
                lineup = festival_service().get_lineup(slug)
            except DomainError as err:
                return error_response(err)
            data = LineupSerializer(lineup).data
            cache.set(key, data, cache_timeout())
        return Response(data)


class ScheduleView(APIView):
    """Handler for GET /api/festivals/{slug}/schedule?day=YYYY-MM-DD"""

    def get(self, request: Request, slug: str) -> Response:
        raw_day = request.query_params.get("day")
        try:
            key = schedule_key(slug, parse_day(raw_day))
            data = cache.get(key)
            if data is None:
                data = ScheduleSerializer(festival_service().get_schedule(slug, raw_day)).data
                cache_page(schedule_index_key(slug), key, data, cache_timeout())
        except DomainError as err:
            return error_response(err)
        return Response(data)


class MyPlanView(APIView):
    """Handler for GET /api/my/{slug}?day=YYYY-MM-DD

    Anonymous users are sent to sign in and come back here afterwards.
    """

    def get(self, request: Request, slug: str):
        if not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        service = plan_service()
        raw_day = request.query_params.get("day")
        try:
            plan = service.get_or_create_plan(request.user.pk, slug)
            key = plan_key(plan.id, parse_day(raw_day))
            data = cache.get(key)
            if data is None:
                data = PlanViewSerializer(service.get_plan_view(request.user.pk, slug, raw_day)).data
                cache_page(plan_index_key(plan.id), key, data, cache_timeout())
        except DomainError as err:
            return error_response(err)
        return Response(data)


class PlannerView(APIView):
    """Handler for /api/my/{slug}/planner

    GET renders stage columns for a day with the user's selection;
    POST applies one planner action (drag-and-drop or button).
    """

    permission_classes = [IsAuthenticated]

    def get(self, request: Request, slug: str) -> Response:
        service = plan_service()
        try:
            festival = festival_service().get_festival(slug)
            view = service.get_planner(request.user.pk, slug, request.query_params.get("day"))
        except DomainError as err:
            return error_response(err)
        return Response(serialize_planner(view, festival.timezone))

    def post(self, request: Request, slug: str) -> Response:
        payload = PlannerActionRequestSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            change = plan_service().apply_action(
                request.user.pk,
                slug,
                str(payload.validated_data["set_id"]),
                ActionKind(payload.validated_data["action"]),
                stage=payload.validated_data.get("stage"),
            )
        except DomainError as err:
            return error_response(err)
        return Response(MembershipChangeSerializer(change).data)


class _PlanMutationView(APIView):
    permission_classes = [IsAuthenticated]
    action: ActionKind

    def post(self, request: Request, slug: str) -> Response:
        payload = SetRequestSerializer(data=request.data)
        if not payload.is_valid():
            return validation_error_response(payload.errors)
        try:
            change = plan_service().apply_action(
                request.user.pk, slug, str(payload.validated_data["set_id"]), self.action
            )
        except DomainError as err:
            return error_response(err)
        return Response(MembershipChangeSerializer(change).data)


class ToggleSetView(_PlanMutationView):
    """Handler for POST /api/plan/{slug}/toggle"""

    action = ActionKind.TOGGLE


class AddSetView(_PlanMutationView):
    """Handler for POST /api/plan/{slug}/add"""

    action = ActionKind.ADD


class RemoveSetView(_PlanMutationView):
    """Handler for POST /api/plan/{slug}/remove"""

    action = ActionKind.REMOVE


class CalendarExportView(APIView):
    """Handler for GET /api/ical/{plan_id}"""

    def get(self, request: Request, plan_id: str):
        try:
            calendar = calendar_service().export_plan(plan_id)
        except DomainError as err:
            if err.code is ErrorCode.CALENDAR_EXPORT_FAILED:
                return HttpResponse("Failed to generate calendar", status=500, content_type="text/plain")
            return error_response(err)
        response = HttpResponse(calendar.content, content_type=CONTENT_TYPE)
        response["Content-Disposition"] = f'attachment; filename="{calendar.filename}"'
        return response
