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
Models for the Admin Console

Users own exactly one PromoCode. PaymentRequests point at a User by id only
and carry a copy of the user's name taken when the request was created.
"""

import uuid
from datetime import date
from enum import Enum
from typing import Optional, Union


SOCIAL_PLATFORMS = ("twitter", "linkedin", "instagram")


class DataValidationError(Exception):
    """Used for data validation errors when deserializing or updating."""


class PaymentStatus(str, Enum):
    """Approval states of a payment request"""

    PENDING = "PENDING"
    PAID = "PAID"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @classmethod
    def parse(cls, value: Union[str, "PaymentStatus"]) -> "PaymentStatus":
        """Converts a status name into a PaymentStatus (case-insensitive)"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as error:
            allowed = ", ".join(s.value for s in cls)
            raise DataValidationError(
                f"Invalid status {value!r}. Accepted: {allowed}"
            ) from error


def new_id() -> str:
    """Returns a fresh opaque identifier"""
    return str(uuid.uuid4())


def parse_date(field: str, value) -> date:
    """Parses an ISO calendar date with a per-field validation message"""
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except Exception as e:
        raise DataValidationError(
            f"Field '{field}' must be an ISO date (YYYY-MM-DD)"
        ) from e


def parse_number(field: str, value) -> Union[int, float]:
    """Parses an int or float, accepting numeric strings as form inputs do"""
    if isinstance(value, bool):
        raise DataValidationError(f"Field '{field}' must be a number")
    if isinstance(value, (int, float)):
        return value
    try:
        text = str(value).strip()
        return int(text) if text.lstrip("-").isdigit() else float(text)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"Field '{field}' must be a number") from e


def _require_str(data: dict, field: str) -> str:
    value = data[field]
    if not isinstance(value, str):
        raise DataValidationError(f"Field '{field}' must be a string")
    return value


######################################################################
#  P R O M O   C O D E
######################################################################
class PromoCode:
    """
    Class that represents a discount code with a validity window
    """

    def __init__(
        self,
        code: str = "",
        discount_percentage: Union[int, float] = 0,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ):
        self.code = code
        self.discount_percentage = discount_percentage
        self.start_date = start_date
        self.end_date = end_date

    def __repr__(self):
        return f"<PromoCode {self.code} ends=[{self.end_date}]>"

    def __eq__(self, other):
        if not isinstance(other, PromoCode):
            return NotImplemented
        return self.serialize() == other.serialize()

    def is_active(self, on_date: Optional[date] = None) -> bool:
        """A promo code is active on any date up to and including its end date"""
        if self.end_date is None:
            return False
        if on_date is None:
            on_date = date.today()
        return on_date <= self.end_date

    def serialize(self) -> dict:
        """Serializes a PromoCode into a dictionary"""
        return {
            "code": self.code,
            "discountPercentage": self.discount_percentage,
            "startDate": self.start_date.isoformat() if self.start_date else None,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }

    def deserialize(self, data: dict):
        """
        Deserializes a PromoCode from a dictionary

        Args:
            data (dict): a dictionary containing the promo code data
        """
        try:
            self.code = _require_str(data, "code")
            self.discount_percentage = parse_number(
                "discountPercentage", data["discountPercentage"]
            )
            self.start_date = parse_date("startDate", data["startDate"])
            self.end_date = parse_date("endDate", data["endDate"])
        except KeyError as error:
            raise DataValidationError(
                f"Invalid promo code: missing '{error.args[0]}'"
            ) from error
        except TypeError as error:
            raise DataValidationError(
                "Invalid promo code: body contained malformed or invalid data"
            ) from error
        return self


######################################################################
#  U S E R
######################################################################
class User:
    """
    Class that represents a console User
    """

    def __init__(
        self,
        id: Optional[str] = None,  # pylint: disable=redefined-builtin
        first_name: str = "",
        last_name: str = "",
        email: str = "",
        social_media: Optional[dict] = None,
        promo_code: Optional[PromoCode] = None,
    ):
        self.id = id
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.social_media = {platform: None for platform in SOCIAL_PLATFORMS}
        for platform, handle in (social_media or {}).items():
            self.set_social(platform, handle)
        self.promo_code = promo_code if promo_code is not None else PromoCode()

    def __repr__(self):
        return f"<User {self.full_name} id=[{self.id}]>"

    def __eq__(self, other):
        if not isinstance(other, User):
            return NotImplemented
        return self.serialize() == other.serialize()

    @property
    def full_name(self) -> str:
        """First and last name joined for display"""
        return f"{self.first_name} {self.last_name}".strip()

    def set_social(self, platform: str, handle: Optional[str]):
        """Sets or clears the handle for one social platform"""
        if platform not in SOCIAL_PLATFORMS:
            raise DataValidationError(
                f"Unknown social platform {platform!r}. "
                f"Accepted: {', '.join(SOCIAL_PLATFORMS)}"
            )
        if handle is not None and not isinstance(handle, str):
            raise DataValidationError(f"Social handle for '{platform}' must be a string")
        self.social_media[platform] = handle.strip() if handle and handle.strip() else None

    def validate(self):
        """Checks the fields an editor must fill in before a User can be saved"""
        missing = [
            name
            for name, value in (
                ("firstName", self.first_name),
                ("lastName", self.last_name),
                ("email", self.email),
                ("promoCode.code", self.promo_code.code),
            )
            if not value or not str(value).strip()
        ]
        if self.promo_code.discount_percentage is None:
            missing.append("promoCode.discountPercentage")
        if self.promo_code.start_date is None:
            missing.append("promoCode.startDate")
        if self.promo_code.end_date is None:
            missing.append("promoCode.endDate")
        if missing:
            raise DataValidationError(f"Required fields are empty: {', '.join(missing)}")
        if "@" not in self.email:
            raise DataValidationError("Field 'email' must be an email address")

    def serialize(self) -> dict:
        """Serializes a User into a dictionary"""
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "socialMedia": dict(self.social_media),
            "promoCode": self.promo_code.serialize(),
        }

    def deserialize(self, data: dict):
        """
        Deserializes a User from a dictionary

        The id is taken from the data when present so that seeded and
        edited records keep their identity.
        """
        try:
            if data.get("id") is not None:
                self.id = str(data["id"])
            self.first_name = _require_str(data, "firstName")
            self.last_name = _require_str(data, "lastName")
            self.email = _require_str(data, "email")
            social = data.get("socialMedia") or {}
            if not isinstance(social, dict):
                raise DataValidationError("Field 'socialMedia' must be an object")
            self.social_media = {platform: None for platform in SOCIAL_PLATFORMS}
            for platform, handle in social.items():
                self.set_social(platform, handle)
            promo = data["promoCode"]
            if not isinstance(promo, dict):
                raise DataValidationError("Field 'promoCode' must be an object")
            self.promo_code = PromoCode().deserialize(promo)
        except AttributeError as error:
            raise DataValidationError("Invalid attribute: " + error.args[0]) from error
        except KeyError as error:
            raise DataValidationError(f"Invalid user: missing '{error.args[0]}'") from error
        except TypeError as error:
            raise DataValidationError(
                "Invalid user: body contained malformed or invalid data"
            ) from error
        return self


######################################################################
#  P A Y M E N T   R E Q U E S T
######################################################################
class PaymentRequest:
    """
    Class that represents money owed by a User awaiting approval

    user_name is a snapshot taken when the request was created. It is not
    kept in sync with later edits to the User, and user_id may point at a
    User that no longer exists.
    """

    def __init__(
        self,
        id: Optional[str] = None,  # pylint: disable=redefined-builtin
        user_id: Optional[str] = None,
        user_name: str = "",
        amount: Union[int, float] = 0,
        status: PaymentStatus = PaymentStatus.PENDING,
        date: Optional["date"] = None,  # pylint: disable=redefined-outer-name
        receipt_image: Optional[str] = None,
    ):
        self.id = id
        self.user_id = user_id
        self.user_name = user_name
        self.amount = amount
        self.status = status
        self.date = date
        self.receipt_image = receipt_image

    def __repr__(self):
        return f"<PaymentRequest {self.id} status=[{self.status.value}]>"

    def __eq__(self, other):
        if not isinstance(other, PaymentRequest):
            return NotImplemented
        return self.serialize() == other.serialize()

    def serialize(self) -> dict:
        """Serializes a PaymentRequest into a dictionary"""
        return {
            "id": self.id,
            "userId": self.user_id,
            "userName": self.user_name,
            "amount": self.amount,
            "status": self.status.value,
            "date": self.date.isoformat() if self.date else None,
            "receiptImage": self.receipt_image,
        }

    def deserialize(self, data: dict):
        """Deserializes a PaymentRequest from a dictionary"""
        try:
            if data.get("id") is not None:
                self.id = str(data["id"])
            self.user_id = str(data["userId"])
            self.user_name = _require_str(data, "userName")
            self.amount = parse_number("amount", data["amount"])
            if self.amount <= 0:
                raise DataValidationError("Field 'amount' must be positive")
            self.status = PaymentStatus.parse(data.get("status", PaymentStatus.PENDING))
            self.date = parse_date("date", data["date"])
            receipt = data.get("receiptImage")
            if receipt is not None and not isinstance(receipt, str):
                raise DataValidationError("Field 'receiptImage' must be a data URL string")
            self.receipt_image = receipt or None
        except KeyError as error:
            raise DataValidationError(
                f"Invalid payment request: missing '{error.args[0]}'"
            ) from error
        except TypeError as error:
            raise DataValidationError(
                "Invalid payment request: body contained malformed or invalid data"
            ) from error
        return self
