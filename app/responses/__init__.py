"""Text responses returned to the tool caller.

The builder strips nulls from the payload, attaches field descriptions
for the fields that are present, and appends warnings and follow-up hints.
"""

from app.responses.response_builder import build_empty_response, build_tool_response

__all__ = ["build_empty_response", "build_tool_response"]
