from __future__ import annotations

import logging

from widgetforge.core.errors import ValidationError

from .request import WidgetRequest

logger = logging.getLogger(__name__)


def validate_request(request: WidgetRequest) -> WidgetRequest:
    """
    Return the request unchanged, or raise ValidationError for the first broken
    field in the order: command, refresh interval, markup, positioning.
    """
    if not request.command:
        logger.debug("Validation failed: empty command")
        raise ValidationError(code="validation.empty_command", message="Command cannot be empty")

    if isinstance(request.refresh_interval_ms, bool) or request.refresh_interval_ms <= 0:
        logger.debug("Validation failed: refresh interval %r", request.refresh_interval_ms)
        raise ValidationError(
            code="validation.invalid_refresh_frequency",
            message="Refresh frequency must be greater than 0",
            data={"refreshIntervalMs": request.refresh_interval_ms},
        )

    if not request.markup:
        logger.debug("Validation failed: empty markup")
        raise ValidationError(code="validation.empty_markup", message="Markup cannot be empty")

    if not request.positioning:
        logger.debug("Validation failed: empty positioning")
        raise ValidationError(code="validation.empty_positioning", message="Positioning cannot be empty")

    return request
