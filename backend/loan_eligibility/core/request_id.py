"""Correlation id resolution and generation."""

import uuid
from typing import Callable, Optional

REQUEST_ID_HEADER = "X-Request-ID"

RequestIdGenerator = Callable[[], str]


def generate_request_id() -> str:
    """Generate a fresh correlation id.

    Backed by ``uuid4`` so that concurrent callers never contend on shared state.
    """
    return uuid.uuid4().hex


def resolve_request_id(
    inbound: Optional[str],
    generator: RequestIdGenerator = generate_request_id,
) -> str:
    """Use the client-supplied id when non-empty, otherwise generate one."""
    if inbound and inbound.strip():
        return inbound
    return generator()
