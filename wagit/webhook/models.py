"""Inbound message model and reply rendering for the WhatsApp webhook."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from twilio.twiml.messaging_response import MessagingResponse

from wagit.errors import ValidationError

REQUIRED_FIELDS = ["MessageSid", "From", "To", "Body", "NumMedia"]

NO_RESPONSE_TEXT = "Sorry, I couldn't come up with a response right now."


def missing_fields(form: Mapping[str, str]) -> list[str]:
    return [name for name in REQUIRED_FIELDS if form.get(name) is None]


@dataclass(frozen=True)
class InboundMessage:
    """One message delivered by the gateway. Parsed once, never mutated."""

    message_sid: str
    sender: str  # "whatsapp:+15551234567"
    recipient: str
    body: str
    num_media: int = 0
    profile_name: str | None = None
    wa_id: str | None = None

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> InboundMessage:
        """Build a message from the gateway's form fields.

        Raises ValidationError listing every missing required field. An empty
        Body is allowed (media-only messages have one).
        """
        missing = missing_fields(form)
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}", fields=missing)

        try:
            num_media = int(form["NumMedia"])
        except ValueError:
            num_media = 0

        return cls(
            message_sid=form["MessageSid"],
            sender=form["From"],
            recipient=form["To"],
            body=form["Body"],
            num_media=num_media,
            profile_name=form.get("ProfileName") or None,
            wa_id=form.get("WaId") or None,
        )


@dataclass(frozen=True)
class InferenceRequest:
    model: str
    prompt: str
    stream: bool = False

    def payload(self) -> dict:
        return {"model": self.model, "prompt": self.prompt, "stream": self.stream}


def echo_reply(body: str) -> str:
    return f'You said: "{body}"'


def render_twiml(reply_text: str) -> str:
    """Render the acknowledgment document the gateway expects."""
    response = MessagingResponse()
    response.message(reply_text)
    return str(response)
