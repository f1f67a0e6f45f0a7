from vidshare.services._shared.errors import InvalidIdentifierError


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def parse_positive_id(raw, *, kind: str) -> int:
    """Return ``raw`` as a positive int or raise ``InvalidIdentifierError``."""
    if isinstance(raw, bool):
        raise InvalidIdentifierError(kind)
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw or "").strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidIdentifierError(kind)
        value = int(text)
    if value <= 0:
        raise InvalidIdentifierError(kind)
    return value
