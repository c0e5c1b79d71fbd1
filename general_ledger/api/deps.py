"""
Request-scoped dependencies shared by the routers.
"""

from fastapi import Header

from general_ledger.schemas.journal import PostingActor


def get_actor(
    x_actor_id: str | None = Header(default=None),
    x_can_post_financial_entries: bool = Header(default=False),
) -> PostingActor:
    """
    Build the posting actor from headers set by the upstream
    authorization layer. Without the capability header the
    caller may read but not post.
    """
    return PostingActor(
        actor_id=x_actor_id,
        can_post_financial_entries=x_can_post_financial_entries,
    )
