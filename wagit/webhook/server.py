"""FastAPI application exposing the WhatsApp webhook.

POST /whatsapp receives a form-encoded message from the gateway, builds a
reply (echo or local inference), sends it through the gateway and answers
with a TwiML document. GET /whatsapp is the gateway's liveness probe.

Run with:
    uvicorn wagit.webhook.server:app --port 8000
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from wagit.activity import log_event
from wagit.config import Config
from wagit.errors import ConfigurationError, UpstreamCallError, ValidationError
from wagit.webhook.gateway import ReplySender
from wagit.webhook.inference import InferenceClient
from wagit.webhook.models import InboundMessage, echo_reply, render_twiml

logging.basicConfig(level=Config.load().log_level)
logger = logging.getLogger(__name__)

SenderFactory = Callable[[Config], ReplySender]
InferenceFactory = Callable[[Config], InferenceClient]

router = APIRouter()


def get_config() -> Config:
    return Config.load()


def _make_sender(config: Config) -> ReplySender:
    return ReplySender(
        account_sid=config.twilio_account_sid,
        auth_token=config.twilio_auth_token,
        from_=config.twilio_whatsapp_from,
        timeout=config.request_timeout,
    )


def _make_inference(config: Config) -> InferenceClient:
    return InferenceClient(
        base_url=config.ollama_url,
        models=config.inference_models,
        timeout=config.inference_timeout,
    )


def get_sender_factory() -> SenderFactory:
    return _make_sender


def get_inference_factory() -> InferenceFactory:
    return _make_inference


def build_reply(message: InboundMessage, config: Config, make_inference: InferenceFactory) -> str:
    """Produce the reply text for a message according to the reply mode."""
    if not config.uses_inference:
        return echo_reply(message.body)

    client = make_inference(config)
    try:
        return client.generate(message.body)
    finally:
        client.close()


@router.post("/whatsapp")
async def receive_message(
    request: Request,
    config: Config = Depends(get_config),
    make_sender: SenderFactory = Depends(get_sender_factory),
    make_inference: InferenceFactory = Depends(get_inference_factory),
) -> Response:
    form = await request.form()
    fields = {key: value for key, value in form.items() if isinstance(value, str)}
    message = InboundMessage.from_form(fields)

    logger.info(
        f"WhatsApp message {message.message_sid} from {message.sender} "
        f"({message.profile_name or 'N/A'}, wa_id {message.wa_id or 'N/A'}): {message.body!r}"
    )
    log_event(
        "message_received",
        message_sid=message.message_sid,
        sender=message.sender,
        recipient=message.recipient,
        body=message.body,
        num_media=message.num_media,
        profile_name=message.profile_name,
        wa_id=message.wa_id,
    )

    issues = config.validate()
    if issues:
        raise ConfigurationError(issues)

    try:
        reply = await run_in_threadpool(build_reply, message, config, make_inference)
        sender = make_sender(config)
        reply_sid = await run_in_threadpool(sender.send, message.sender, reply)
    except UpstreamCallError as e:
        log_event("reply_failed", message_sid=message.message_sid, error=str(e))
        raise

    log_event("reply_sent", message_sid=message.message_sid, reply_sid=reply_sid, reply=reply)
    return Response(content=render_twiml(reply), media_type="text/xml")


@router.get("/whatsapp")
def verify_endpoint() -> dict:
    """Gateway endpoint verification. Does nothing else."""
    return {"message": "WhatsApp webhook endpoint is active"}


async def _invalid_payload(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning(f"Rejected webhook payload: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid webhook payload", "details": exc.fields},
    )


async def _configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    for issue in exc.issues:
        logger.error(f"Configuration error: {issue}")
    log_event("config_error", issues=exc.issues)
    return JSONResponse(
        status_code=500,
        content={"error": "Server configuration error", "details": exc.issues},
    )


async def _upstream_error(request: Request, exc: UpstreamCallError) -> JSONResponse:
    logger.error(f"Error processing WhatsApp message: {exc}")
    details = exc.upstream_message or str(exc)
    return JSONResponse(
        status_code=500,
        content={"error": "Failed to process message", "details": details},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="wagit webhook")
    app.include_router(router)
    app.add_exception_handler(ValidationError, _invalid_payload)
    app.add_exception_handler(ConfigurationError, _configuration_error)
    app.add_exception_handler(UpstreamCallError, _upstream_error)

    @app.get("/")
    def health_check():
        return {"status": "online"}

    return app


app = create_app()
