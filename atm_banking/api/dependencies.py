"""
Request dependencies and error translation
"""

from fastapi import HTTPException, Request, status

from ..atm import ATMSystem
from ..errors import BankingError, ErrorKind


STATUS_BY_KIND = {
    ErrorKind.VALIDATION_FAILURE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_ID: status.HTTP_409_CONFLICT,
    ErrorKind.CAPACITY_EXCEEDED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.POOL_EXHAUSTED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
}


def get_atm_system(request: Request) -> ATMSystem:
    """The ATMSystem the application was created with"""
    return request.app.state.atm_system


def http_error(error: BankingError) -> HTTPException:
    """Translate a core error into the matching HTTP response"""
    return HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_400_BAD_REQUEST),
        detail={"error": error.kind.value, "message": str(error)}
    )


def require_active_session(system: ATMSystem, customer_id: str) -> None:
    """Refuse transacting actions until the default password is replaced"""
    if system.must_change_password(customer_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"error": "password_change_required",
                    "message": "You must change your password before continuing"}
        )
