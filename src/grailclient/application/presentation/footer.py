"""Footer text."""

from grailclient.domain.ports import IClock

SITE_OWNER = "Digital Rev"


# The year comes from the injected clock, never from a global "now", so the
# text is deterministic under test.
def copyright_text(clock: IClock, owner: str = SITE_OWNER) -> str:
    """Copyright line for the page footer."""
    return f"© {clock.now().year} {owner}. All grooves reserved."
