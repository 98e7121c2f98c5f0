from fastapi import HTTPException

from courtqueue.core.errors import INVALID_INPUT_FAILURES, NOT_FOUND_FAILURES, OperationResult


def raise_for_failure(result: OperationResult) -> OperationResult:
    """Translate a rejected engine command into an HTTP error."""
    if result:
        return result

    if result.failure in NOT_FOUND_FAILURES:
        status_code = 404
    elif result.failure in INVALID_INPUT_FAILURES:
        status_code = 400
    else:
        status_code = 409
    raise HTTPException(
        status_code=status_code,
        detail={"failure": result.failure.value, "message": result.detail},
    )
