from __future__ import annotations

import logging
import time

from househelp.application.exceptions import BackendError, RecordNotFoundError
from househelp.application.ports.backend import BackendPort, TableQuery
from househelp.application.utils.rows import entities_from_rows, entity_from_row
from househelp.domain.entities.payment import (
    PaymentMethod,
    PaymentMethodDetails,
    PaymentProvider,
    PaymentType,
    Transaction,
    Wallet,
    WalletTransaction,
)
from househelp.domain.entities.result import ActionResult, PaymentResult


class PaymentUseCase:
    def __init__(self, backend: BackendPort, currency: str = "RWF") -> None:
        self._backend = backend
        self._currency = currency
        self._logger = logging.getLogger(__name__)

    async def get_user_payment_methods(self, user_id: str) -> list[PaymentMethod]:
        """Default method first, then newest."""
        try:
            rows = await self._backend.select(
                "payment_methods",
                TableQuery(eq={"user_id": user_id}, order=(("is_default", False), ("created_at", False))),
            )
            return entities_from_rows(PaymentMethod, rows)
        except BackendError as e:
            self._logger.error("Error fetching payment methods", extra={"user_id": user_id, "error": str(e)})
            return []

    async def add_payment_method(
        self,
        user_id: str,
        provider: PaymentProvider | str,
        details: PaymentMethodDetails,
    ) -> ActionResult:
        provider_value = PaymentProvider(provider).value
        try:
            if details.set_default:
                await self._backend.update(
                    "payment_methods", {"is_default": False}, TableQuery(eq={"user_id": user_id})
                )

            row = await self._backend.insert(
                "payment_methods",
                {
                    "user_id": user_id,
                    "provider": provider_value,
                    "is_default": details.set_default,
                    "last_four": details.last_four,
                    "expiry_month": details.expiry_month,
                    "expiry_year": details.expiry_year,
                    "cardholder_name": details.cardholder_name,
                    "phone_number": details.phone_number,
                    "token_id": details.token_id,
                },
            )
            return ActionResult(success=True, id=str(row["id"]))
        except (BackendError, KeyError) as e:
            self._logger.error("Error adding payment method", extra={"user_id": user_id, "error": str(e)})
            return ActionResult(success=False, error="Failed to add payment method")

    async def set_default_payment_method(self, user_id: str, payment_method_id: str) -> bool:
        try:
            await self._backend.update("payment_methods", {"is_default": False}, TableQuery(eq={"user_id": user_id}))
            await self._backend.update(
                "payment_methods",
                {"is_default": True},
                TableQuery(eq={"id": payment_method_id, "user_id": user_id}),
            )
            return True
        except BackendError as e:
            self._logger.error(
                "Error setting default payment method", extra={"user_id": user_id, "error": str(e)}
            )
            return False

    async def remove_payment_method(self, user_id: str, payment_method_id: str) -> bool:
        try:
            await self._backend.delete(
                "payment_methods", TableQuery(eq={"id": payment_method_id, "user_id": user_id})
            )
            return True
        except BackendError as e:
            self._logger.error("Error removing payment method", extra={"user_id": user_id, "error": str(e)})
            return False

    async def get_user_transactions(self, user_id: str) -> list[Transaction]:
        try:
            rows = await self._backend.select(
                "transactions",
                TableQuery(eq={"user_id": user_id}, order=(("created_at", False),)),
            )
            return entities_from_rows(Transaction, rows)
        except BackendError as e:
            self._logger.error("Error fetching transactions", extra={"user_id": user_id, "error": str(e)})
            return []

    async def get_wallet_balance(self, user_id: str) -> float:
        try:
            data = await self._backend.rpc("get_wallet_balance", {"user_id_param": user_id})
            return float(data or 0)
        except (BackendError, TypeError, ValueError) as e:
            self._logger.error("Error fetching wallet balance", extra={"user_id": user_id, "error": str(e)})
            return 0.0

    async def get_wallet_transactions(self, user_id: str) -> list[WalletTransaction]:
        try:
            try:
                row = await self._backend.select_one("wallets", TableQuery(eq={"user_id": user_id}))
            except RecordNotFoundError:
                return []
            wallet = entity_from_row(Wallet, row)

            rows = await self._backend.select(
                "wallet_transactions",
                TableQuery(eq={"wallet_id": wallet.id}, order=(("created_at", False),)),
            )
            return entities_from_rows(WalletTransaction, rows)
        except BackendError as e:
            self._logger.error("Error fetching wallet transactions", extra={"user_id": user_id, "error": str(e)})
            return []

    async def process_wallet_payment(
        self,
        user_id: str,
        amount: float,
        description: str,
        reference_id: str,
    ) -> PaymentResult:
        """Debit the user's wallet. Balance checks happen in the stored procedure."""
        if amount <= 0:
            raise ValueError("Payment amount must be positive")
        try:
            data = await self._backend.rpc(
                "process_wallet_payment",
                {
                    "user_id_param": user_id,
                    "amount_param": amount,
                    "description_param": description,
                    "reference_id_param": reference_id,
                },
            )
            return PaymentResult(
                success=bool(data["success"]),
                message=str(data.get("message") or ""),
                transaction_id=data.get("transaction_id"),
            )
        except (BackendError, KeyError, TypeError, AttributeError) as e:
            self._logger.error("Error processing wallet payment", extra={"user_id": user_id, "error": str(e)})
            return PaymentResult(success=False, message="Failed to process payment")

    async def initiate_payment(
        self,
        user_id: str,
        payment_method_id: str,
        amount: float,
        booking_id: str,
        payment_type: PaymentType | str,
        description: str,
    ) -> ActionResult:
        """
        Record a transaction against one of the user's payment methods.
        There is no gateway integration; the charge is settled immediately
        with a simulated provider reference.
        """
        if amount <= 0:
            raise ValueError("Payment amount must be positive")
        payment_type_value = PaymentType(payment_type).value
        try:
            await self._backend.select_one(
                "payment_methods", TableQuery(eq={"id": payment_method_id, "user_id": user_id})
            )

            transaction = await self._backend.insert(
                "transactions",
                {
                    "user_id": user_id,
                    "booking_id": booking_id,
                    "payment_method_id": payment_method_id,
                    "amount": amount,
                    "currency": self._currency,
                    "status": "pending",
                    "payment_type": payment_type_value,
                    "description": description,
                },
            )

            await self._backend.update(
                "transactions",
                {
                    "status": "completed",
                    "provider_transaction_id": f"sim_{int(time.time() * 1000)}",
                    "provider_response": {"status": "success"},
                },
                TableQuery(eq={"id": transaction["id"]}),
            )
            return ActionResult(success=True, id=str(transaction["id"]))
        except (BackendError, KeyError) as e:
            self._logger.error(
                "Error initiating payment", extra={"user_id": user_id, "booking_id": booking_id, "error": str(e)}
            )
            return ActionResult(success=False, error="Failed to process payment")
