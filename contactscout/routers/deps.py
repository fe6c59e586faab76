from fastapi import Request

from ..services.jobs import JobEngine


def get_engine(request: Request) -> JobEngine:
    return request.app.state.engine
