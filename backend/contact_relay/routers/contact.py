# contact_relay/routers/contact.py
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict

from contact_relay.core.mailer import DeliveryError, compose_email, send_email
from contact_relay.core.settings import SmtpConfig, get_settings

log = logging.getLogger("uvicorn.error")

router = APIRouter(tags=["contact"])

SENT_OK = "Email sent successfully"
SEND_FAILED = "Internal Server error occured"


class ContactSubmission(BaseModel):
    # strict: numbers, booleans and nulls are rejected instead of coerced
    model_config = ConfigDict(strict=True)

    name: str
    email: str
    message: str


# Plain `def` so the blocking SMTP call runs on the threadpool, not the event loop.
@router.post("/contact", response_class=PlainTextResponse)
def send_contact(
    payload: ContactSubmission,
    config: SmtpConfig = Depends(get_settings),
):
    outbound = compose_email(payload, config)
    try:
        send_email(outbound, config)
    except DeliveryError as exc:
        log.error(f"[contact] Could not send email: {exc}")
        return PlainTextResponse(SEND_FAILED, status_code=500)
    return PlainTextResponse(SENT_OK, status_code=200)
