"""
API routes - Subscription and confirmation endpoints.

This module defines the HTTP endpoints:
- POST /subscriptions - Submit name and email, receive a confirmation email
- GET /subscriptions/confirm - Follow the emailed confirmation link

Handlers are plain functions: FastAPI runs them in its threadpool, so the
blocking database and email calls only hold up the current request.
"""

from fastapi import APIRouter, Depends, Form, HTTPException, Query, Response, status

from src.api.dependencies import get_confirmation_service, get_subscription_service
from src.api.models import ErrorResponse
from src.domain.confirmation import ConfirmationService
from src.domain.exceptions import UnexpectedError, ValidationError
from src.domain.ports import ConfirmResult
from src.domain.subscription import SubscriptionService

router = APIRouter(tags=["subscriptions"])


@router.post(
    "/subscriptions",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid name or email"},
        500: {"model": ErrorResponse, "description": "Subscription could not be processed"},
    },
    summary="Subscribe to the newsletter",
    description="Submit name and email as form data. "
    "A confirmation link is emailed to the provided address.",
)
def subscribe(
    name: str = Form(...),
    email: str = Form(...),
    service: SubscriptionService = Depends(get_subscription_service),
) -> Response:
    """
    Record a pending subscription and send the confirmation email.

    Resubmitting before confirming resends the same link.
    """
    try:
        service.subscribe(name, email)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid subscription details",
        ) from None
    except UnexpectedError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from None
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/subscriptions/confirm",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid confirmation token"},
        500: {"model": ErrorResponse, "description": "Confirmation could not be processed"},
    },
    summary="Confirm a pending subscription",
    description="Target of the link sent in the confirmation email.",
)
def confirm(
    subscription_token: str = Query(...),
    service: ConfirmationService = Depends(get_confirmation_service),
) -> Response:
    """
    Confirm the subscriber owning the token.

    Malformed and unknown tokens get the same 401 response.
    """
    try:
        result = service.confirm(subscription_token)
    except UnexpectedError:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from None

    if result == ConfirmResult.CONFIRMED:
        return Response(status_code=status.HTTP_200_OK)

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid confirmation token",
    )
