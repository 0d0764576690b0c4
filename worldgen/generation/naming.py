"""World name uniqueness."""

from collections.abc import Collection


def resolve_unique_name(name: str, existing_names: Collection[str]) -> str:
    """Return a name that does not collide with existing_names.

    An unused name comes back unchanged. Otherwise a numeric suffix is
    appended, starting at 1, until the result is free:

        >>> resolve_unique_name("Atlantis", {"Atlantis", "Atlantis 1"})
        'Atlantis 2'
    """
    if name not in existing_names:
        return name

    suffix = 1
    while f"{name} {suffix}" in existing_names:
        suffix += 1
    return f"{name} {suffix}"
