"""Schemas for experiment session responses."""

from typing import (
    Any,
    Dict,
)

from experiment_api.shared.response_models import BaseResponse


class ExperimentResponse(BaseResponse[Dict[str, Any]]):
    """Envelope for one normalized session record."""
    pass
