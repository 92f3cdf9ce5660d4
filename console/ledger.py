######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
Payment Ledger

Ordered, in-memory collection of PaymentRequests. Status transitions are
not constrained: every status can be reached from every other status.
"""

import copy
import logging
from typing import List, Optional, Union

from console.models import DataValidationError, PaymentRequest, PaymentStatus

logger = logging.getLogger(__name__)


class PaymentLedger:
    """Holds every PaymentRequest in insertion order"""

    def __init__(self):
        self._payments: List[PaymentRequest] = []

    def __len__(self):
        return len(self._payments)

    def __repr__(self):
        return f"<PaymentLedger count=[{len(self._payments)}]>"

    def list_payments(
        self, status: Union[PaymentStatus, str, None] = None
    ) -> List[PaymentRequest]:
        """Returns all PaymentRequests, optionally only those with the given status"""
        if status is None:
            logger.info("Processing all Payments")
            return [copy.deepcopy(p) for p in self._payments]
        wanted = PaymentStatus.parse(status)
        logger.info("Processing status query for %s ...", wanted.value)
        return [copy.deepcopy(p) for p in self._payments if p.status == wanted]

    def find_payment(self, payment_id: str) -> Optional[PaymentRequest]:
        """Finds a PaymentRequest by its id (single object or None)"""
        logger.info("Processing lookup for payment id %s ...", payment_id)
        payment = self._get(payment_id)
        return copy.deepcopy(payment) if payment else None

    def add_payment(self, payment: PaymentRequest):
        """Appends a PaymentRequest; only seed data creates payments"""
        logger.info("Creating %s", payment)
        self._payments.append(copy.deepcopy(payment))

    def update_payment_status(
        self,
        payment_id: str,
        new_status: Union[PaymentStatus, str],
        receipt: Optional[str] = None,
    ) -> Optional[PaymentRequest]:
        """
        Sets the status of a PaymentRequest and optionally its receipt

        Args:
            payment_id: id of the PaymentRequest
            new_status: any PaymentStatus, regardless of the current one
            receipt: data URL replacing receiptImage; None keeps the current
                one and an empty string removes it

        Returns:
            the updated PaymentRequest, or None when the id is unknown
        """
        status = PaymentStatus.parse(new_status)
        if receipt is not None and not isinstance(receipt, str):
            raise DataValidationError("Field 'receiptImage' must be a data URL string")
        payment = self._get(payment_id)
        if payment is None:
            logger.info("Payment %s not found; status update ignored", payment_id)
            return None
        logger.info(
            "Changing %s status %s -> %s", payment.id, payment.status.value, status.value
        )
        payment.status = status
        if receipt is not None:
            payment.receipt_image = receipt or None
        return copy.deepcopy(payment)

    def clear(self):
        """Removes all PaymentRequests"""
        logger.info("Removing all Payments")
        self._payments.clear()

    def _get(self, payment_id: str) -> Optional[PaymentRequest]:
        for payment in self._payments:
            if payment.id == payment_id:
                return payment
        return None
