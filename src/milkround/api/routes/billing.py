"""Monthly billing and payment endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from ...models.domain import BillingMonth, Payment
from ...schemas.billing import (
    BillingLineModel,
    BillingRunResponse,
    BillMessageResponse,
    BillModel,
    PaymentCreate,
    PaymentModel,
    StatementResponse,
)
from ...store import MilkRoundStore
from ..deps import get_store

router = APIRouter(tags=["billing"])


def _payment_model(store: MilkRoundStore, payment: Payment) -> PaymentModel:
    return PaymentModel(
        id=payment.id,
        customer_id=payment.customer_id,
        date=payment.date,
        amount=payment.amount,
        method=payment.method,
        settled=store.payments.is_settled(payment.id),
    )


@router.post("/payments", response_model=PaymentModel, status_code=status.HTTP_201_CREATED)
async def record_payment(payload: PaymentCreate, store: MilkRoundStore = Depends(get_store)) -> PaymentModel:
    payment = store.receive_payment(
        payload.customer_id,
        payload.date,
        payload.amount,
        payload.method,
        settle=payload.settle,
    )
    return _payment_model(store, payment)


@router.get("/payments", response_model=list[PaymentModel], status_code=status.HTTP_200_OK)
async def list_payments(
    customer_id: str | None = Query(default=None),
    month: str | None = Query(default=None, description="YYYY-MM"),
    store: MilkRoundStore = Depends(get_store),
) -> list[PaymentModel]:
    payments = store.payments.for_month(month) if month else store.payments.all()
    if customer_id:
        payments = [payment for payment in payments if payment.customer_id == customer_id]
    return [_payment_model(store, payment) for payment in payments]


@router.post("/payments/{payment_id}/settle", response_model=PaymentModel, status_code=status.HTTP_200_OK)
async def settle_payment(payment_id: str, store: MilkRoundStore = Depends(get_store)) -> PaymentModel:
    store.settle_payment(payment_id)
    return _payment_model(store, store.payments.get(payment_id))


@router.get("/billing/{month}", response_model=BillingRunResponse, status_code=status.HTTP_200_OK)
async def billing_run(month: str, store: MilkRoundStore = Depends(get_store)) -> BillingRunResponse:
    billing_month = BillingMonth.parse(month)
    lines = store.billing_run(billing_month)
    return BillingRunResponse(
        month=str(billing_month),
        due_date=store.billing.due_date_for(billing_month),
        lines=[
            BillingLineModel(
                customer_id=line.customer.id,
                customer_name=line.customer.name,
                is_active=line.customer.is_active,
                quantity=line.bill.quantity if line.bill else None,
                amount=line.bill.amount if line.bill else None,
                total_due=line.total_due,
                error=line.error,
            )
            for line in lines
        ],
        total_amount=sum((line.bill.amount for line in lines if line.bill), 0.0),
    )


@router.get(
    "/billing/{month}/customers/{customer_id}",
    response_model=StatementResponse,
    status_code=status.HTTP_200_OK,
)
async def customer_statement(
    month: str, customer_id: str, store: MilkRoundStore = Depends(get_store)
) -> StatementResponse:
    statement = store.monthly_statement(customer_id, month)
    return StatementResponse(
        customer_id=statement.customer.id,
        customer_name=statement.customer.name,
        bill=BillModel(
            customer_id=statement.bill.customer_id,
            month=str(statement.bill.month),
            quantity=statement.bill.quantity,
            amount=statement.bill.amount,
        ),
        balance=statement.customer.balance,
        total_due=statement.total_due,
        due_date=statement.due_date,
    )


@router.post(
    "/billing/{month}/customers/{customer_id}/message",
    response_model=BillMessageResponse,
    status_code=status.HTTP_200_OK,
)
async def bill_message(month: str, customer_id: str, store: MilkRoundStore = Depends(get_store)) -> BillMessageResponse:
    """Draft a payment reminder. A reply overtaken by a newer request is flagged ``superseded``."""
    statement = store.monthly_statement(customer_id, month)
    result = await store.messages.request(
        statement.customer,
        statement.total_due,
        statement.due_date,
        statement.bill.month,
    )
    return BillMessageResponse(
        customer_id=customer_id,
        month=str(statement.bill.month),
        message=result.text,
        superseded=result.superseded,
    )
