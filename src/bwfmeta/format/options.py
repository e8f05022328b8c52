"""Parse options."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParseOptions:
    """Settings that change how chunk payloads are presented.

    None of these affect which chunks are found or how the walk proceeds.
    """

    pretty_xml: bool = True
    """Re-indent well-formed iXML documents."""

    xml_indent: str = "  "
    """Indent unit used when re-indenting iXML."""


DEFAULT_OPTIONS = ParseOptions()
