"""Identifier helpers for catalog URLs."""


def parse_entity_id(slug: str | None) -> str | None:
    """Extract the numeric id from a catalog slug.

    Detail URLs carry "<id>-<name>" slugs like "6365678-MATT-OX". The API only
    wants the id part.

    Returns:
        The id, or None for empty input
    """
    if not slug:
        return None
    head = slug.strip().split("-", 1)[0]
    return head or None
