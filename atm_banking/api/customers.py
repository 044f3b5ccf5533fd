"""
Customer registration endpoints
"""

from fastapi import APIRouter, HTTPException, Depends, status

from .dependencies import get_atm_system, http_error
from .schemas import RegisterCustomerRequest
from ..atm import ATMSystem
from ..errors import BankingError


router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def register_customer(
    request: RegisterCustomerRequest,
    system: ATMSystem = Depends(get_atm_system)
):
    """Register a new customer and issue default credentials"""
    try:
        credential = system.register(
            name=request.name,
            email=request.email,
            address=request.address,
            phone=request.phone
        )
    except BankingError as e:
        raise http_error(e)

    return {
        "customer_id": credential.customer_id,
        "password": credential.password,
        "message": "Registration successful. You will be required to change your password upon first login."
    }


@router.get("/{customer_id}")
async def get_customer(
    customer_id: str,
    system: ATMSystem = Depends(get_atm_system)
):
    """Get customer profile"""
    customer = system.ledger.find(customer_id)
    if not customer:
        raise HTTPException(status_code=404, detail="Customer not found")

    return {
        "customer_id": customer.customer_id,
        "name": customer.name,
        "email": customer.email,
        "address": customer.address,
        "phone": customer.phone,
        "is_first_login": customer.is_first_login,
        "created_at": customer.created_at.isoformat()
    }
