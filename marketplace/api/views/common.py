from rest_framework.response import Response

from marketplace.services import ServiceResult, http_status_for


UUID_PATTERN = "[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"


def service_error_response(result: ServiceResult) -> Response:
    """``{"error": code, "detail": message}`` with the status mapped from the error code."""
    return Response(result.to_dict(), status=http_status_for(result))


def int_param(request, name: str, default: int, maximum: int = None) -> int:
    """Positive integer query parameter; bad values fall back to ``default``."""
    try:
        value = int(request.query_params.get(name, default))
    except (TypeError, ValueError):
        return default
    if value < 1:
        return default
    if maximum is not None:
        value = min(value, maximum)
    return value
