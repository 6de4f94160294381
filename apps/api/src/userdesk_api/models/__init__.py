"""API response models."""

from userdesk_api.models.health import HealthCheckResponse

__all__ = ["HealthCheckResponse"]
