"""
Naming utilities and built-in naming styles.
"""

import re
from collections.abc import Callable

# One word: a capitalised or lowercase run, an acronym, or a number.
# Separators (underscores, hyphens, spaces) never match.
_WORD = re.compile(r"[A-Z]?[a-z]+|[A-Z]+(?![a-z])|[0-9]+")


def to_pascal_case(text: str) -> str:
    """Convert an identifier to PascalCase.

    Examples:
        "user_profiles" -> "UserProfiles"
        "USER_STATUS" -> "UserStatus"
        "orderItems" -> "OrderItems"
        "HTTPServer" -> "HttpServer"
    """
    return "".join(word.capitalize() for word in _WORD.findall(text))


def to_camel_case(text: str) -> str:
    """Convert an identifier to camelCase ("user_profiles" -> "userProfiles")."""
    pascal = to_pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def preserve_case(text: str) -> str:
    return text


NAMING_STYLES: dict[str, Callable[[str], str]] = {
    "preserve": preserve_case,
    "pascal": to_pascal_case,
    "camel": to_camel_case,
}


def get_naming_style(style: str) -> Callable[[str], str]:
    """Get a naming style by name.

    Raises:
        ValueError: If the style is unknown
    """
    if style not in NAMING_STYLES:
        raise ValueError(f"Unknown naming style '{style}', expected one of {', '.join(NAMING_STYLES)}")
    return NAMING_STYLES[style]


def name_formatter(style: str) -> Callable[[str], str]:
    """Build a one-argument formatter (enums, composite types) for a style."""
    return get_naming_style(style)


def suffixed_name_formatter(style: str) -> Callable[[str, str], str]:
    """Build a two-argument formatter (tables, views, functions) for a style.

    The style applies to the entity name; the operation or grouping name is
    appended unchanged.
    """
    convert = get_naming_style(style)

    def formatter(name: str, suffix: str) -> str:
        return f"{convert(name)}{suffix}"

    return formatter
