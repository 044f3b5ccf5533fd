"""
Account endpoints: balance inquiry, withdrawal and transfer

Every action runs as the caller's turn at the access gate.
"""

from fastapi import APIRouter, Depends

from .dependencies import get_atm_system, http_error, require_active_session
from .schemas import BalanceResponse, MoneyModel, WithdrawRequest, TransferRequest
from ..atm import ATMSystem
from ..errors import BankingError


router = APIRouter()


@router.get("/{customer_id}/balance", response_model=BalanceResponse)
async def get_balance(
    customer_id: str,
    system: ATMSystem = Depends(get_atm_system)
):
    """Savings and current balances"""
    try:
        with system.session_turn(customer_id):
            require_active_session(system, customer_id)
            snapshot = system.inquire(customer_id)
    except BankingError as e:
        raise http_error(e)

    return BalanceResponse.from_snapshot(snapshot)


@router.post("/{customer_id}/withdraw")
async def withdraw(
    customer_id: str,
    request: WithdrawRequest,
    system: ATMSystem = Depends(get_atm_system)
):
    """Withdraw from savings or current"""
    try:
        with system.session_turn(customer_id):
            require_active_session(system, customer_id)
            result = system.withdraw(customer_id, request.account_type, request.amount)
            snapshot = system.inquire(customer_id)
    except BankingError as e:
        raise http_error(e)

    return {
        "message": "Withdrawal successful",
        "amount": MoneyModel.from_money(result.amount),
        "penalty": MoneyModel.from_money(result.penalty),
        "penalty_applied": result.penalty_applied,
        "balances": BalanceResponse.from_snapshot(snapshot)
    }


@router.post("/{customer_id}/transfer")
async def transfer(
    customer_id: str,
    request: TransferRequest,
    system: ATMSystem = Depends(get_atm_system)
):
    """Transfer between own accounts or to another customer"""
    to_customer_id = request.to_customer_id or customer_id
    try:
        with system.session_turn(customer_id):
            require_active_session(system, customer_id)
            result = system.transfer(
                customer_id, to_customer_id,
                request.from_account_type, request.to_account_type,
                request.amount
            )
            snapshot = system.inquire(customer_id)
    except BankingError as e:
        raise http_error(e)

    return {
        "message": "Transfer successful",
        "to_customer_id": to_customer_id,
        "amount": MoneyModel.from_money(result.amount),
        "penalty": MoneyModel.from_money(result.penalty),
        "penalty_applied": result.penalty_applied,
        "balances": BalanceResponse.from_snapshot(snapshot)
    }
