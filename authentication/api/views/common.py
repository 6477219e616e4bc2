from rest_framework import status
from rest_framework.response import Response


ERROR_STATUS = {
    "invalid_credentials": status.HTTP_401_UNAUTHORIZED,
    "account_inactive": status.HTTP_403_FORBIDDEN,
    "seller_not_found": status.HTTP_404_NOT_FOUND,
    "seller_already_exists": status.HTTP_400_BAD_REQUEST,
    "invalid_transition": status.HTTP_400_BAD_REQUEST,
    "internal_error": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(result, default_status=status.HTTP_400_BAD_REQUEST):
    """Map a failed service Result to ``{"error": code, "detail": message}``."""
    body = {"error": result.error, "detail": result.message}
    errors = getattr(result, "errors", None)
    if errors:
        body["errors"] = errors
    return Response(body, status=ERROR_STATUS.get(result.error, default_status))
