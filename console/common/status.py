"""
Descriptive HTTP status codes, for code readability.

See:
https://www.rfc-editor.org/rfc/rfc9110.html#name-status-codes
"""

# Successful 2xx
HTTP_200_OK = 200
HTTP_201_CREATED = 201
HTTP_204_NO_CONTENT = 204

# Client Error 4xx
HTTP_400_BAD_REQUEST = 400
HTTP_401_UNAUTHORIZED = 401
HTTP_404_NOT_FOUND = 404
HTTP_405_METHOD_NOT_ALLOWED = 405
HTTP_409_CONFLICT = 409
HTTP_413_REQUEST_ENTITY_TOO_LARGE = 413
HTTP_415_UNSUPPORTED_MEDIA_TYPE = 415

# Server Error 5xx
HTTP_500_INTERNAL_SERVER_ERROR = 500
