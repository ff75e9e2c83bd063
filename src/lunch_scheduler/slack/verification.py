"""Slack request signature verification as a FastAPI dependency."""

import logging

from fastapi import HTTPException, Request
from slack_sdk.signature import SignatureVerifier

from lunch_scheduler.config import get_settings

logger = logging.getLogger(__name__)


async def verify_slack_request(request: Request) -> dict:
    """Check the X-Slack-Signature of a request and return its JSON body.

    The signature is computed over the raw body, so the body is read as
    bytes before it is parsed. SignatureVerifier also rejects timestamps
    older than five minutes.

    Raises HTTPException(403) when the signing secret is unset or the
    signature does not match.
    """
    settings = get_settings()
    if not settings.slack_signing_secret:
        logger.error("SLACK_SIGNING_SECRET is not set; rejecting Slack request")
        raise HTTPException(status_code=403, detail="Invalid Slack signature")

    body = await request.body()
    verifier = SignatureVerifier(signing_secret=settings.slack_signing_secret)
    if not verifier.is_valid(
        body=body.decode("utf-8"),
        timestamp=request.headers.get("X-Slack-Request-Timestamp", ""),
        signature=request.headers.get("X-Slack-Signature", ""),
    ):
        logger.warning("Rejected Slack request with invalid signature")
        raise HTTPException(status_code=403, detail="Invalid Slack signature")

    return await request.json()
