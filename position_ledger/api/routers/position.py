"""Position API router composition for net position reads."""

from __future__ import annotations

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from position_ledger.domain import DateFilterError, record_position_summary_to_mapping
from position_ledger.ledger import PositionQueryPort
from position_ledger.logging_setup import get_logger

logger = get_logger(__name__)


def api_create_position_router(position_resolver: PositionQueryPort) -> APIRouter:
    """Create position router exposing the net position endpoint.

    Args:
        position_resolver: Ledger-layer position query service.

    Returns:
        APIRouter: Router exposing `/position`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if position_resolver is None:
        raise ValueError("position_resolver must not be None")

    router = APIRouter(tags=["position"])

    @router.get("/position")
    def api_position_get(
        entity: str | None = Query(default=None),
        date: str = Query(default=""),
    ) -> JSONResponse:
        """Return one entity's net balance and asset holdings as of an inclusive date.

        Args:
            entity: Entity identifier.
            date: Optional partial or complete ISO-8601 cutoff.

        Returns:
            JSONResponse: Position envelope or error payload.
        """

        normalized_entity = (entity or "").strip()
        if not normalized_entity:
            payload = {"status_code": 400, "code": "WRONG_PARAMS", "message": "Wrong params"}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)

        try:
            position = position_resolver.ledger_resolve_position(normalized_entity, date.strip())
        except DateFilterError as error:
            payload = {"status_code": 400, "code": "INVALID_DATE", "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_400_BAD_REQUEST)
        except RuntimeError as error:
            logger.error("position query failed entity=%s: %s", normalized_entity, error)
            payload = {"status_code": 503, "code": "STORE_UNAVAILABLE", "message": str(error)}
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)
        except ArithmeticError as error:
            logger.error("position arithmetic failed entity=%s: %r", normalized_entity, error)
            payload = {
                "status_code": 500,
                "code": "POSITION_OUT_OF_RANGE",
                "message": "position cannot be represented with stored values",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

        payload = {"status_code": 200, "data": record_position_summary_to_mapping(position)}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


__all__ = ["api_create_position_router"]
