"""Heuristic classification of raw identifiers as type references.

This is syntactic, not semantic: it accepts array and tuple sugar and any
capitalized identifier, and cannot tell a type name from an unrelated
capitalized value such as an enum case.
"""

RESERVED_WORDS: frozenset[str] = frozenset({"self", "super", "nil", "true", "false"})

# Synthesized when a function declares no result type; never recorded as a dependency
VOID_MARKER = "Void"

INITIALIZER_MARKER = "init"


def is_keyword_or_literal(text: str) -> bool:
    """True for self/super references and the nil/true/false literals."""
    return text in RESERVED_WORDS


def is_valid_type_name(text: str) -> bool:
    """Decide whether a raw identifier or type string counts as a type reference.

    Args:
        text: Trimmed identifier or type text, e.g. "Int", "[String]", "(A, B)"

    Returns:
        True if the text is not reserved and starts with an uppercase
        letter, "[" (collection sugar) or "(" (tuple sugar)
    """
    if not text or is_keyword_or_literal(text):
        return False
    first = text[0]
    return first.isupper() or first == "[" or first == "("
