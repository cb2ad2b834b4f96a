"""Parsers for exported ballot responses."""

from .base import ResponseParser

# Parser registry - import parsers here to register them
_parsers: list[type[ResponseParser]] = []


def register_parser(parser_class: type[ResponseParser]) -> type[ResponseParser]:
    """Decorator to register a parser class."""
    _parsers.append(parser_class)
    return parser_class


def get_all_parsers() -> list[type[ResponseParser]]:
    """Return all registered parser classes."""
    return _parsers.copy()


def detect_parser(source: str) -> ResponseParser | None:
    """Auto-detect and return an appropriate parser instance for the given source."""
    for parser_class in _parsers:
        parser = parser_class()
        if parser.can_parse(source):
            return parser
    return None


def detect_parser_by_content(content: bytes, filename: str) -> ResponseParser | None:
    """Return a parser that recognizes the content itself, or None."""
    for parser_class in _parsers:
        parser = parser_class()
        if parser.can_parse_content(content, filename):
            return parser
    return None


def get_supported_sources() -> str:
    """Return a user-friendly description of supported export sources."""
    lines = ["We currently support responses from:"]
    for parser_class in _parsers:
        example = getattr(parser_class, "EXAMPLE_URL", None)
        if example:
            lines.append(f"  - {example}")
    return "\n".join(lines)
