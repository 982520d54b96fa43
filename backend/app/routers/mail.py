"""Email relay route (authenticated; the sender is always the platform address)."""
import logging
from fastapi import APIRouter, Depends, status

from app.dependencies import get_mailer
from app.models.user import User
from app.schemas.common import Message
from app.schemas.event import EmailPayload
from app.security import get_current_user
from app.services.email_service import Mailer

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/send-email", response_model=Message, status_code=status.HTTP_202_ACCEPTED)
async def send_email(
    payload: EmailPayload,
    current_user: User = Depends(get_current_user),
    mailer: Mailer = Depends(get_mailer),
):
    """Send an email on behalf of the logged-in user; replies go to their address."""
    await mailer.send(
        payload.to,
        payload.subject,
        payload.text,
        html=payload.html,
        reply_to=current_user.email,
    )
    logger.info("User %s sent an email to %s", current_user.user_id, payload.to)
    return {"message": "Email sent"}
