"""
Python-specific naming utilities.

Generated property names come from the shared name resolver; here they
are only escaped when they would collide with Python keywords or with
members every generated class defines.
"""

from ...core.naming import escape_reserved

# Python reserved keywords
PYTHON_RESERVED_WORDS = {
    "False",
    "None",
    "True",
    "and",
    "as",
    "assert",
    "async",
    "await",
    "break",
    "class",
    "continue",
    "def",
    "del",
    "elif",
    "else",
    "except",
    "finally",
    "for",
    "from",
    "global",
    "if",
    "import",
    "in",
    "is",
    "lambda",
    "nonlocal",
    "not",
    "or",
    "pass",
    "raise",
    "return",
    "try",
    "while",
    "with",
    "yield",
}

# Members of every generated class
GENERATED_CLASS_MEMBERS = {
    "API_NAME",
    "FIELDS",
    "retrieve",
    "from_sf_object",
}


def python_property_name(name: str) -> str:
    """Property name that is safe to declare on a generated class."""
    return escape_reserved(name, PYTHON_RESERVED_WORDS | GENERATED_CLASS_MEMBERS)
