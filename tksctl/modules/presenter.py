"""Text rendering of cluster requests and LCM responses."""
from google.protobuf import json_format, text_format


def render_request(message) -> str:
    """Canonical JSON for a request message, using proto field names."""
    return json_format.MessageToJson(
        message,
        indent=2,
        preserving_proto_field_name=True,
    )


def render_response(message) -> str:
    if message is None:
        return "<nil>"
    return text_format.MessageToString(message).rstrip()


def success_line(name: str) -> str:
    return f"Success: The request to create cluster {name} was accepted."


def failure_line(error: Exception) -> str:
    return f"Error: {error}"
