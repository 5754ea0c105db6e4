from fastapi.responses import JSONResponse
import logging


def failed(action: str) -> JSONResponse:
    """Log the active exception and answer with a generic 500."""
    logging.exception("Failed to %s", action)
    return JSONResponse({"message": f"Failed to {action}"}, status_code=500)
