"""Slack Events API endpoint for lunch requests."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.responses import JSONResponse

from lunch_scheduler.slack.handlers import handle_slack_event
from lunch_scheduler.slack.verification import verify_slack_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["slack"])


@router.post("/slack/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    payload: dict = Depends(verify_slack_request),
) -> JSONResponse:
    """Receive signed Slack events and acknowledge within Slack's 3s window.

    Redeliveries (X-Slack-Retry-Num) are acknowledged without processing, so
    each mention books at most once.
    """
    retry_num = request.headers.get("X-Slack-Retry-Num")
    if retry_num:
        logger.info(
            "Ignoring Slack retry #%s (%s)",
            retry_num,
            request.headers.get("X-Slack-Retry-Reason", "unknown"),
        )
        return JSONResponse({"ok": True})

    return handle_slack_event(payload, background_tasks)
