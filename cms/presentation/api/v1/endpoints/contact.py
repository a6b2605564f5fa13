"""Public contact form endpoint."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from cms.application.schemas import ContactRequest, ContactResponse, ValidationErrorResponse
from cms.application.services import ContactService
from cms.domain.entities import ContactMessage
from cms.infrastructure.dependencies import get_contact_service

router = APIRouter(prefix="/contact", tags=["Contact"])


@router.post(
    "",
    response_model=ContactResponse,
    responses={422: {"model": ValidationErrorResponse}},
)
async def send_contact_message(
    data: ContactRequest,
    service: ContactService = Depends(get_contact_service),
):
    """Validate the visitor's message and mail it to the site owner."""
    message = ContactMessage(email=data.email, subject=data.subject, message=data.message)
    if not await service.send(message):
        return JSONResponse(status_code=422, content={"errors": message.errors})
    return ContactResponse(sent=True)
