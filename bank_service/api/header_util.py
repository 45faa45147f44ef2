"""Utility functions for building alert headers on REST responses."""
from typing import Optional

from bank_service.config import settings


def create_alert(message: str, param: str) -> dict[str, str]:
    app_name = settings.application_name
    return {
        f"X-{app_name}-alert": message,
        f"X-{app_name}-params": param,
    }


def create_entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.created", param)


def create_entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.updated", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.deleted", param)


def create_failure_alert(
    entity_name: str,
    error_key: str,
    default_message: Optional[str] = None,
) -> dict[str, str]:
    """
    Build the headers for a failed request.

    The client resolves ``error.<error_key>`` to a translated message;
    ``default_message`` is not sent.
    """
    app_name = settings.application_name
    return {
        f"X-{app_name}-error": f"error.{error_key}",
        f"X-{app_name}-params": entity_name,
    }
