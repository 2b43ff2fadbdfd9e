from .blocks import parse_edit_response

__all__ = ["parse_edit_response"]
