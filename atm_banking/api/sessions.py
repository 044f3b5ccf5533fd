"""
Session endpoints: login, logout, turn checks and password changes
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import get_atm_system, http_error
from .schemas import LoginRequest, ChangePasswordRequest
from ..atm import ATMSystem
from ..errors import BankingError


router = APIRouter()


@router.post("/login")
async def login(
    request: LoginRequest,
    system: ATMSystem = Depends(get_atm_system)
):
    """Validate credentials and join the access queue"""
    if not system.login(request.customer_id, request.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    return {
        "customer_id": request.customer_id,
        "is_my_turn": system.is_my_turn(request.customer_id),
        "must_change_password": system.must_change_password(request.customer_id),
        "message": "Login successful"
    }


@router.post("/{customer_id}/logout")
async def logout(
    customer_id: str,
    system: ATMSystem = Depends(get_atm_system)
):
    """Leave the access queue"""
    if not system.logout(customer_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return {"message": "Logged out successfully"}


@router.get("/{customer_id}/turn")
async def get_turn(
    customer_id: str,
    system: ATMSystem = Depends(get_atm_system)
):
    """Whether this session may transact now"""
    return {
        "customer_id": customer_id,
        "is_my_turn": system.is_my_turn(customer_id),
        "waiting": len(system.access_gate)
    }


@router.post("/{customer_id}/password")
async def change_password(
    customer_id: str,
    request: ChangePasswordRequest,
    system: ATMSystem = Depends(get_atm_system)
):
    """Replace the password; required once after the first login"""
    if not system.is_logged_in(customer_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Login required")

    try:
        changed = system.change_password(customer_id, request.new_password)
    except BankingError as e:
        raise http_error(e)

    if not changed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return {"message": "Password changed successfully"}
