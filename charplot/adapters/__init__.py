from .text import LineResult, parse_line, parse_value, read_frames, strip_comment

__all__ = [
    "LineResult",
    "parse_line",
    "parse_value",
    "read_frames",
    "strip_comment",
]
