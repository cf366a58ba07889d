from rest_framework.response import Response


def api_response(*, detail, message, status_code, data=None):
    return Response(
        {
            "detail": detail,
            "message": message,
            "status": status_code,
            "data": data,
        },
        status=status_code,
    )
