"""
Collection naming utilities - Name grammar and storage identifiers.

A collection name doubles as a storage identifier, so it has to be a plain
identifier: a letter or underscore followed by ASCII word characters. Anything
else is filtered out by the resolver rather than rejected loudly.
"""

import re

TABLE_PREFIX = "_content_"

# ASCII keeps \w to [A-Za-z0-9_]; fullmatch avoids "$" accepting a trailing newline
_COLLECTION_NAME_PATTERN = re.compile(r"[a-z_]\w*", re.IGNORECASE | re.ASCII)


def get_table_name(name: str) -> str:
    """
    Derive the storage table name for a collection.

    Args:
        name: Collection name (expected to be valid)

    Returns:
        Table name, always the fixed prefix followed by the name

    Example:
        >>> get_table_name("blog")
        '_content_blog'
    """
    return f"{TABLE_PREFIX}{name}"


def is_valid_collection_name(name: object) -> bool:
    """
    Check whether a collection name matches the naming grammar.

    Args:
        name: Candidate collection name (config keys are not guaranteed to be strings)

    Returns:
        True if the name starts with a letter or underscore and continues with
        word characters only
    """
    if not isinstance(name, str):
        return False
    return _COLLECTION_NAME_PATTERN.fullmatch(name) is not None
