"""Split a raw type annotation into type tokens.

A single left-to-right scan with an angle-bracket depth counter. The result
is the outer container name plus each top-level generic argument; nested
generic arguments stay whole (no recursion):

    >>> sorted(extract_type_tokens("Dictionary<String, [Int]>"))
    ['Dictionary', 'String', '[Int]']
    >>> sorted(extract_type_tokens("Outer<Inner<A,B>,C>"))
    ['C', 'Inner<A,B>', 'Outer']
"""


def extract_type_tokens(type_text: str) -> set[str]:
    """Tokenize a type annotation string.

    Args:
        type_text: Raw annotation, e.g. "Result<[User], Error>"

    Returns:
        Set of whitespace-trimmed tokens
    """
    tokens: set[str] = set()
    buffer: list[str] = []
    depth = 0

    for char in type_text:
        if char == "<":
            if depth == 0:
                tokens.add("".join(buffer).strip())
                buffer = []
            else:
                buffer.append(char)
            depth += 1
        elif char == ">":
            depth -= 1
            if depth == 0:
                tokens.add("".join(buffer).strip())
                buffer = []
            else:
                buffer.append(char)
        elif char == ",":
            # Only top-level generic arguments are separated
            if depth == 1:
                tokens.add("".join(buffer).strip())
                buffer = []
            else:
                buffer.append(char)
        else:
            buffer.append(char)

    if buffer:
        tokens.add("".join(buffer).strip())

    return tokens
