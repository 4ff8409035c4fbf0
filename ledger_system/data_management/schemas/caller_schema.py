"""Caller identity passed explicitly to every read and write.

The authentication collaborator resolves a request to a verified user id or
to nothing. The core never authenticates; it only consumes this value. An
absent id and an empty id both mean "anonymous".
"""

from typing import Literal, Optional, Union

from pydantic import BaseModel, Field


class Identified(BaseModel):
    """A caller with a verified user id."""

    kind: Literal["identified"] = "identified"
    user_id: str = Field(..., min_length=1)

    model_config = {"frozen": True}


class Anonymous(BaseModel):
    """A caller without identity (logged out)."""

    kind: Literal["anonymous"] = "anonymous"

    model_config = {"frozen": True}


CallerContext = Union[Identified, Anonymous]

ANONYMOUS = Anonymous()


def caller_from(value: Union[CallerContext, str, None]) -> CallerContext:
    """Normalize whatever the transport holds into a CallerContext.

    Args:
        value: An existing CallerContext, a raw user id, or None.

    Returns:
        Identified for a non-empty user id, ANONYMOUS otherwise.
    """
    if isinstance(value, (Identified, Anonymous)):
        return value
    if value is None or not str(value).strip():
        return ANONYMOUS
    return Identified(user_id=str(value))


def require_identified(caller: Union[CallerContext, str, None]) -> Identified:
    """Resolve a caller that must be identified (write operations).

    Raises:
        PermissionError: If the caller is anonymous.
    """
    resolved = caller_from(caller)
    if isinstance(resolved, Anonymous):
        raise PermissionError("Authentication required")
    return resolved


def user_id_of(caller: CallerContext) -> Optional[str]:
    """Return the user id for Identified callers, None for Anonymous."""
    if isinstance(caller, Identified):
        return caller.user_id
    return None
