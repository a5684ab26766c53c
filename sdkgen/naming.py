"""Identifier case conversion between Java and Rust spellings."""


def java_to_snake_case(name: str) -> str:
    """Convert a camelCase method name to a snake_case function name.

    Every uppercase letter starts a new word, so acronyms are not collapsed:
    ``HTTPServer`` becomes ``h_t_t_p_server``.
    """
    result: list[str] = []
    for ch in name:
        if ch.isupper():
            if result:
                result.append("_")
            result.append(ch.lower())
        else:
            result.append(ch)
    return "".join(result)


def pascal_to_snake_case(name: str) -> str:
    """Convert a PascalCase type name (e.g. a request body) to a file stem."""
    return java_to_snake_case(name)


def snake_to_pascal_case(name: str) -> str:
    return "".join(word[0].upper() + word[1:] for word in name.split("_") if word)
