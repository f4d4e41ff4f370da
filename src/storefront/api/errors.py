"""HTTP mapping for storefront errors.

Protean's handlers cover ``ValidationError`` (400) and
``ObjectNotFoundError`` (404). Starlette picks the most specific handler
along the exception's MRO, so ``PreconditionError`` gets its own 409 even
though it is a ``ValidationError``.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.errors import BookingOutcomeUnknown, CarrierRejected, InvalidSignature, PreconditionError


async def _precondition_failed(request: Request, exc: PreconditionError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"error": exc.messages})


async def _carrier_rejected(request: Request, exc: CarrierRejected) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={"error": "Failed to book delivery, please try again", "reason": exc.reason},
    )


async def _booking_outcome_unknown(request: Request, exc: BookingOutcomeUnknown) -> JSONResponse:
    return JSONResponse(
        status_code=502,
        content={
            "error": "Booking status unknown. Check with the carrier before retrying.",
            "reason": exc.reason,
            "needs_reconciliation": True,
        },
    )


async def _invalid_signature(request: Request, exc: InvalidSignature) -> JSONResponse:
    return JSONResponse(status_code=401, content={"error": str(exc)})


def register_storefront_exception_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(PreconditionError, _precondition_failed)
    app.add_exception_handler(CarrierRejected, _carrier_rejected)
    app.add_exception_handler(BookingOutcomeUnknown, _booking_outcome_unknown)
    app.add_exception_handler(InvalidSignature, _invalid_signature)
