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
View Coordinator

Owns the whole console state: the session gate, the user registry, the
payment ledger, the active view and the one modal that may be open. Every
change to that state goes through a method of ViewCoordinator.
"""

import copy
import logging
import threading
from concurrent.futures import Future
from datetime import date, timedelta
from enum import Enum
from typing import Callable, List, Optional, Union

from console.editor import EditorCommand, apply_update
from console.ledger import PaymentLedger
from console.models import (
    DataValidationError,
    PaymentRequest,
    PaymentStatus,
    PromoCode,
    User,
    new_id,
)
from console.receipts import ReceiptReader
from console.registry import UserRegistry
from console.seed import mock_payments, mock_users
from console.session import SessionGate

logger = logging.getLogger(__name__)

RECENT_USERS = 3


class ModalStateError(Exception):
    """Used when a modal is opened over another one or acted on while closed"""


class View(str, Enum):
    """Top-level pages of the console"""

    DASHBOARD = "dashboard"
    USERS = "users"
    PAYMENTS = "payments"

    @classmethod
    def parse(cls, value: Union[str, "View"]) -> "View":
        """Converts a view name into a View"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as error:
            allowed = ", ".join(v.value for v in cls)
            raise DataValidationError(
                f"Invalid view {value!r}. Accepted: {allowed}"
            ) from error


class DashboardStats:
    """Numbers shown on the dashboard, computed from the current state"""

    def __init__(
        self,
        total_users: int,
        active_promos: int,
        pending_payments: int,
        recent_users: List[User],
        on_date: date,
    ):
        self.total_users = total_users
        self.active_promos = active_promos
        self.pending_payments = pending_payments
        self.recent_users = recent_users
        self.on_date = on_date

    def __repr__(self):
        return (
            f"<DashboardStats users=[{self.total_users}] "
            f"active=[{self.active_promos}] pending=[{self.pending_payments}]>"
        )

    def serialize(self) -> dict:
        """Serializes the statistics into a dictionary"""
        return {
            "date": self.on_date.isoformat(),
            "totalUsers": self.total_users,
            "activePromos": self.active_promos,
            "pendingPayments": self.pending_payments,
            "recentUsers": [user.serialize() for user in self.recent_users],
        }


class ViewCoordinator:  # pylint: disable=too-many-instance-attributes, too-many-public-methods
    """
    Single owner of the console state

    Only one modal (the user editor or the payment processor) may be open
    at a time.
    """

    def __init__(
        self,
        clock: Optional[Callable[[], date]] = None,
        reader: Optional[ReceiptReader] = None,
        promo_default_days: int = 30,
    ):
        self.clock = clock or date.today
        self.reader = reader or ReceiptReader()
        self.promo_default_days = promo_default_days
        self._session = SessionGate()
        self._registry = UserRegistry()
        self._ledger = PaymentLedger()
        self._lock = threading.RLock()
        self._current_view = View.DASHBOARD
        self._editing_user: Optional[User] = None
        self._editor_open = False
        self._editor_is_new = False
        self._processing: Optional[PaymentRequest] = None
        self._staged_receipt: Optional[str] = None
        self._receipt_cleared = False
        self._receipt_seq = 0
        self._pending_read = None

    def __repr__(self):
        return (
            f"<ViewCoordinator view=[{self._current_view.value}] "
            f"users=[{len(self._registry)}] payments=[{len(self._ledger)}]>"
        )

    def init_app(self, app):
        """Reads settings from the Flask config and loads the starting data"""
        self.promo_default_days = app.config.get("PROMO_DEFAULT_DAYS", 30)
        self.reader.shutdown()
        self.reader = ReceiptReader(
            max_bytes=app.config.get("RECEIPT_MAX_BYTES", self.reader.max_bytes),
            mime_prefix=app.config.get("RECEIPT_MIME_PREFIX", "image/"),
            workers=app.config.get("RECEIPT_WORKERS", 2),
        )
        app.extensions["console"] = self
        self.reset(seed=app.config.get("SEED_MOCK_DATA", True))

    def reset(self, seed: bool = True):
        """Clears users, payments and view state, then optionally loads mock data"""
        with self._lock:
            self._registry.clear()
            self._ledger.clear()
            self._close_editor()
            self._close_processor()
            self._current_view = View.DASHBOARD
            if seed:
                for user in mock_users():
                    self._registry.save_user(user)
                for payment in mock_payments():
                    self._ledger.add_payment(payment)
        logger.info("Console state reset (seeded=%s)", seed)

    ##################################################
    # SESSION
    ##################################################

    @property
    def session(self) -> SessionGate:
        """The session gate guarding the console"""
        return self._session

    def login(self, username: str = None):
        """Signs the operator in"""
        self._session.login(username)

    def logout(self):
        """Signs the operator out; no domain data is discarded"""
        self._session.logout()

    ##################################################
    # NAVIGATION
    ##################################################

    @property
    def current_view(self) -> View:
        """The page currently shown"""
        return self._current_view

    def navigate(self, view: Union[View, str]) -> View:
        """Switches the active page"""
        target = View.parse(view)
        logger.info("Navigating %s -> %s", self._current_view.value, target.value)
        self._current_view = target
        return target

    ##################################################
    # USERS
    ##################################################

    def list_users(self, search: Optional[str] = None) -> List[User]:
        """All users in insertion order, optionally filtered by a search term"""
        if search:
            return self._registry.search_users(search)
        return self._registry.list_users()

    def find_user(self, user_id: str) -> Optional[User]:
        """Finds a user by id"""
        return self._registry.find_user(user_id)

    def save_user(self, candidate: User):
        """Replaces or appends a user without going through the editor"""
        self._registry.save_user(candidate)

    def delete_user(self, user_id: str, confirm: Callable[[str], bool]) -> bool:
        """Deletes a user once confirm() agrees; returns False when declined"""
        return self._registry.delete_user(user_id, confirm)

    @property
    def user_editor_open(self) -> bool:
        """True while the user editor modal is open"""
        return self._editor_open

    @property
    def editing_user(self) -> Optional[User]:
        """A copy of the draft in the editor, or None"""
        return copy.deepcopy(self._editing_user)

    @property
    def editor_mode(self) -> Optional[str]:
        """'create' or 'edit' while the editor is open, otherwise None"""
        if not self._editor_open:
            return None
        return "create" if self._editor_is_new else "edit"

    def open_user_editor(self, user_id: Optional[str] = None) -> Optional[User]:
        """
        Opens the user editor

        Without a user_id the editor starts empty with a fresh id and a promo
        window from today to today + PROMO_DEFAULT_DAYS. With a user_id the
        editor starts from a copy of that user; an unknown id opens nothing
        and returns None.
        """
        with self._lock:
            self._ensure_no_modal()
            if user_id is None:
                today = self.clock()
                draft = User(
                    id=new_id(),
                    promo_code=PromoCode(
                        code="",
                        discount_percentage=0,
                        start_date=today,
                        end_date=today + timedelta(days=self.promo_default_days),
                    ),
                )
                is_new = True
            else:
                draft = self._registry.find_user(user_id)
                if draft is None:
                    return None
                is_new = False
            self._editing_user = draft
            self._editor_is_new = is_new
            self._editor_open = True
            logger.info("Opened user editor for %s (%s)", draft.id, self.editor_mode)
            return copy.deepcopy(draft)

    def apply_editor_update(self, *commands: EditorCommand) -> User:
        """Applies field updates to the draft; all of them or none"""
        with self._lock:
            self._ensure_editor()
            draft = copy.deepcopy(self._editing_user)
            for command in commands:
                apply_update(draft, command)
            self._editing_user = draft
            return copy.deepcopy(draft)

    def save_user_editor(self) -> User:
        """Validates the draft, stores it and closes the editor"""
        with self._lock:
            self._ensure_editor()
            self._editing_user.validate()
            saved = self._editing_user
            self._registry.save_user(saved)
            self._close_editor()
            return copy.deepcopy(saved)

    def close_user_editor(self):
        """Closes the editor and discards the draft"""
        with self._lock:
            self._close_editor()

    ##################################################
    # PAYMENTS
    ##################################################

    def list_payments(
        self, status: Union[PaymentStatus, str, None] = None
    ) -> List[PaymentRequest]:
        """All payment requests, optionally only those in one status"""
        return self._ledger.list_payments(status)

    def find_payment(self, payment_id: str) -> Optional[PaymentRequest]:
        """Finds a payment request by id"""
        return self._ledger.find_payment(payment_id)

    def payment_owner(self, payment_id: str) -> Optional[User]:
        """The user a payment request points at, or None when it is gone"""
        payment = self._ledger.find_payment(payment_id)
        if payment is None:
            return None
        return self._registry.find_user(payment.user_id)

    def update_payment_status(
        self,
        payment_id: str,
        new_status: Union[PaymentStatus, str],
        receipt: Optional[str] = None,
    ) -> Optional[PaymentRequest]:
        """Sets a payment status directly; see PaymentLedger.update_payment_status"""
        return self._ledger.update_payment_status(payment_id, new_status, receipt)

    @property
    def processing_payment(self) -> Optional[PaymentRequest]:
        """A copy of the payment open in the processor, or None"""
        return copy.deepcopy(self._processing)

    @property
    def staged_receipt(self) -> Optional[str]:
        """The receipt that a decision would attach"""
        return self._staged_receipt

    def open_payment_processor(self, payment_id: str) -> Optional[PaymentRequest]:
        """Opens the processor for a payment; an unknown id opens nothing"""
        with self._lock:
            self._ensure_no_modal()
            payment = self._ledger.find_payment(payment_id)
            if payment is None:
                return None
            self._processing = payment
            self._staged_receipt = payment.receipt_image
            logger.info("Opened payment processor for %s", payment.id)
            return copy.deepcopy(payment)

    def attach_receipt(self, data: bytes, mimetype: str) -> Future:
        """
        Starts reading a receipt file for the open payment

        Returns a Future that resolves to the staged data URL. A later
        attach, clear or close cancels it; only the latest read is staged.
        """
        staged = Future()
        with self._lock:
            self._ensure_processor()
            self._cancel_pending_read()
            self._receipt_seq += 1
            seq = self._receipt_seq
            read = self.reader.read(data, mimetype)
            self._pending_read = (read, staged)
        read.add_done_callback(
            lambda done: self._finish_receipt_read(seq, done, staged)
        )
        return staged

    def clear_receipt(self):
        """Drops the staged receipt; the decision then removes the stored one"""
        with self._lock:
            self._ensure_processor()
            self._cancel_pending_read()
            self._staged_receipt = None
            self._receipt_cleared = True

    def decide_payment(self, status: Union[PaymentStatus, str]) -> Optional[PaymentRequest]:
        """Applies a status to the open payment, attaches the staged receipt and closes"""
        new_status = PaymentStatus.parse(status)
        with self._lock:
            self._ensure_processor()
            receipt = "" if self._receipt_cleared else self._staged_receipt
            updated = self._ledger.update_payment_status(
                self._processing.id, new_status, receipt
            )
            self._close_processor()
            return updated

    def close_payment_processor(self):
        """Closes the processor and drops anything staged"""
        with self._lock:
            self._close_processor()

    ##################################################
    # DASHBOARD
    ##################################################

    def dashboard_stats(self, on_date: Optional[date] = None) -> DashboardStats:
        """Counts users, active promo codes and pending payments"""
        on_date = on_date or self.clock()
        users = self._registry.list_users()
        return DashboardStats(
            total_users=len(users),
            active_promos=sum(1 for u in users if u.promo_code.is_active(on_date)),
            pending_payments=len(self._ledger.list_payments(PaymentStatus.PENDING)),
            recent_users=users[:RECENT_USERS],
            on_date=on_date,
        )

    ##################################################
    # HELPERS
    ##################################################

    def _ensure_no_modal(self):
        if self._editor_open:
            raise ModalStateError("The user editor is already open")
        if self._processing is not None:
            raise ModalStateError("The payment processor is already open")

    def _ensure_editor(self):
        if not self._editor_open:
            raise ModalStateError("The user editor is not open")

    def _ensure_processor(self):
        if self._processing is None:
            raise ModalStateError("The payment processor is not open")

    def _close_editor(self):
        self._editing_user = None
        self._editor_open = False
        self._editor_is_new = False

    def _close_processor(self):
        self._cancel_pending_read()
        self._processing = None
        self._staged_receipt = None
        self._receipt_cleared = False

    def _cancel_pending_read(self):
        self._receipt_seq += 1
        if self._pending_read is not None:
            read, staged = self._pending_read
            read.cancel()
            staged.cancel()
            self._pending_read = None

    def _finish_receipt_read(self, seq: int, read: Future, staged: Future):
        with self._lock:
            if self._pending_read is not None and self._pending_read[1] is staged:
                self._pending_read = None
            stale = seq != self._receipt_seq or self._processing is None
            if stale or read.cancelled() or staged.cancelled():
                staged.cancel()
                return
            error = read.exception()
            if error is not None:
                logger.warning("Receipt rejected: %s", error)
                staged.set_exception(error)
                return
            self._staged_receipt = read.result()
            self._receipt_cleared = False
            staged.set_result(self._staged_receipt)


coordinator = ViewCoordinator()
