"""Per-user overlay results (bookmark / mute toggles)."""

from pydantic import BaseModel


class BookmarkToggle(BaseModel):
    """State of the bookmark after a toggle."""

    bookmarked: bool

    model_config = {"frozen": True}


class MuteToggle(BaseModel):
    """State of the mute after a toggle."""

    muted: bool

    model_config = {"frozen": True}
