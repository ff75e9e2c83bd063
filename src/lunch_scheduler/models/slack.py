"""Slack-side models: the triggering mention and directory lookup results."""

import json

from pydantic import BaseModel, ConfigDict


class RawMessage(BaseModel):
    """An app_mention event reduced to the fields the booking flow needs."""

    model_config = ConfigDict(frozen=True)

    text: str
    channel_id: str
    author_user_id: str


class UserEmailInfo(BaseModel):
    """Directory entry for one participant. email is "" when unknown."""

    user_id: str
    email: str = ""
    name: str = "Unknown"


class UserEmailLookupResult(BaseModel):
    """Outcome of looking up every requested user id, in request order."""

    users: list[UserEmailInfo] = []
    success: bool = True
    error_message: str | None = None

    @property
    def user_emails_json(self) -> str:
        """JSON array form used when the lookup result crosses a wire boundary."""
        return json.dumps([u.model_dump() for u in self.users], ensure_ascii=False)
