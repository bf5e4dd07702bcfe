"""Display names for user profiles."""


def full_name(
    first_name: str | None, last_name: str | None, display_name: str | None,
) -> str:
    """First + last name when present, else display_name, else ''.

    Blank parts are skipped and the rest trimmed, so ("  Max ", None, "mv1")
    gives "Max" and (" ", "", "mv1") gives "mv1".
    """
    parts = [p.strip() for p in (first_name, last_name) if p and p.strip()]
    joined = " ".join(parts)
    if joined:
        return joined
    return display_name or ""
