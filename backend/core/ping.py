"""Health-check payload for the calculator service."""

from backend.schemas.ping import PingResponse


def get_ping(service: str) -> PingResponse:
    """Answer a ping with the name of the service that handled it."""
    return PingResponse(message="pong", service=service)
