"""Thin wrapper around the Twilio REST client for sending WhatsApp replies."""

from __future__ import annotations

import logging

import requests
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.http.http_client import TwilioHttpClient
from twilio.rest import Client

from wagit.errors import UpstreamCallError

logger = logging.getLogger(__name__)


class ReplySender:
    """Sends replies through the messaging gateway from one fixed sender.

    Usage:
        sender = ReplySender(account_sid="AC...", auth_token="...", from_="whatsapp:+1415...")
        sid = sender.send(to="whatsapp:+1555...", body="Hi")
    """

    def __init__(self, account_sid: str, auth_token: str, from_: str, timeout: float = 30.0) -> None:
        self._client = Client(
            account_sid, auth_token, http_client=TwilioHttpClient(timeout=timeout)
        )
        self._from = from_

    def send(self, to: str, body: str) -> str:
        """Send ``body`` to ``to`` and return the gateway's message SID."""
        try:
            message = self._client.messages.create(body=body, from_=self._from, to=to)
        except TwilioRestException as e:
            raise UpstreamCallError(
                "Gateway rejected the reply", status=e.status, upstream_message=e.msg
            ) from e
        except (TwilioException, requests.RequestException) as e:
            raise UpstreamCallError(f"Gateway call failed: {e}") from e
        logger.info(f"Reply sent to {to} (sid {message.sid})")
        return message.sid
