def tokenize(query: str) -> list[str]:
    """
    Split a raw query into lower-case whitespace-delimited tokens.

    The returned list is owned by the caller; rules remove the tokens they
    claim from it in place.
    """
    return query.lower().split()
