"""FastAPI dependencies resolving the services built at startup."""

from fastapi import Request

from hybrid_rag.services.container import Services


def get_services(request: Request) -> Services:
    return request.app.state.services
