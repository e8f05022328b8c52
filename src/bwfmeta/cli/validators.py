def validate_indent_string(type_: object, indent: str) -> None:
    """Validate that an XML indent unit is made of spaces or tabs."""
    if indent.strip(" \t"):
        raise ValueError("Indent must contain only spaces or tabs")

    if len(indent) > 8:
        raise ValueError("Indent must be at most 8 characters")
