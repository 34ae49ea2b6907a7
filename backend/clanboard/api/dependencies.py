"""FastAPI dependencies building services from application state."""

from fastapi import Request

from clanboard.config import Settings
from clanboard.services import MetricService, RosterService, ScheduleService, SeasonService
from clanboard.storage import DocumentStore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_roster_service(request: Request) -> RosterService:
    return RosterService(get_store(request), get_app_settings(request).store)


def get_season_service(request: Request) -> SeasonService:
    return SeasonService(get_store(request), get_app_settings(request).store)


def get_metric_service(request: Request) -> MetricService:
    settings = get_app_settings(request)
    return MetricService(get_store(request), settings.store, settings.metrics)


def get_schedule_service(request: Request) -> ScheduleService:
    return ScheduleService(get_store(request), get_app_settings(request).store)
