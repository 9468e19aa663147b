"""Caller-facing validation messages shared by request models and handlers."""

GENERIC_INVALID_REQUEST = "invalid request"

# keyed by the JSON field name as sent by clients
REQUEST_FIELD_ERRORS = {
    "userInput": "invalid request, userInput must be a non-empty string",
    "options": "invalid request, options must be a JSON object",
    "prompt": "invalid request, prompt must be a non-empty string",
    "image": "invalid request, image must be a base64-encoded string",
}
