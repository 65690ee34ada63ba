"""
Engine type name to platform type name mapping.
"""

# Engine types stored at a wider precision by the platform
_WIDENED_TYPES = {
    "float": "double",
}


def map_type(engine_type_name: str) -> str:
    """Map an engine column type to the platform's type vocabulary.

    Only known lossy types are rewritten; anything else passes through as-is.
    """
    return _WIDENED_TYPES.get(engine_type_name.lower(), engine_type_name)
