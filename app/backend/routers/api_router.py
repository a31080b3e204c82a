from fastapi import APIRouter, Body, Depends, Query, Request

import app_service as svc


def get_container(request: Request):
    return request.app.state.container


router = APIRouter()


@router.get("/today")
def get_today(
    count: int = Query(default=None, ge=0, le=100),
    container=Depends(get_container),
):
    return svc.get_today(container, count=count)


@router.get("/tomorrow")
def get_tomorrow(
    count: int = Query(default=None, ge=0, le=100),
    container=Depends(get_container),
):
    return svc.get_tomorrow(container, count=count)


@router.get("/api/prices")
def get_prices(
    date: str = Query(default=None),
    count: int = Query(default=None, ge=0, le=100),
    container=Depends(get_container),
):
    return svc.get_prices(container, date=date, count=count)


@router.post("/api/prices/refresh")
def refresh_prices(payload: dict = Body(default=None), container=Depends(get_container)):
    return svc.refresh_prices(container, payload=payload)


@router.get("/api/cache-status")
def get_cache_status(container=Depends(get_container)):
    return svc.get_cache_status(container)


@router.get("/api/version")
def get_version():
    return svc.get_version()
