from evalsys.core.identity import ActorResolver


def check_user_permission(user_id: str, owner_id: str | None, *, actors: ActorResolver) -> bool:
    """True if the user is an admin or owns the item."""
    if actors.is_user_admin(user_id):
        return True
    return owner_id is not None and owner_id == user_id
