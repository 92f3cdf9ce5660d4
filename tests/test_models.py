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
Test cases for the console models
"""

from unittest import TestCase
from datetime import date
from console.models import (
    DataValidationError,
    PaymentRequest,
    PaymentStatus,
    PromoCode,
    User,
    new_id,
)
from tests.factories import PaymentRequestFactory, PromoCodeFactory, UserFactory


def user_payload(**overrides) -> dict:
    """Build a valid user JSON payload"""
    base = {
        "id": "u1",
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "socialMedia": {"twitter": "@ada"},
        "promoCode": {
            "code": "ADA20",
            "discountPercentage": 20,
            "startDate": "2025-01-01",
            "endDate": "2025-01-31",
        },
    }
    base.update(overrides)
    return base


######################################################################
#  P R O M O   C O D E   T E S T   C A S E S
######################################################################
class TestPromoCode(TestCase):
    """Test Cases for PromoCode"""

    def test_active_until_end_date_inclusive(self):
        """It should be active up to and including the end date"""
        promo = PromoCode("X", 10, date(2024, 1, 1), date(2024, 1, 31))
        self.assertTrue(promo.is_active(date(2023, 12, 1)))
        self.assertTrue(promo.is_active(date(2024, 1, 31)))
        self.assertFalse(promo.is_active(date(2024, 2, 1)))

    def test_active_defaults_to_today(self):
        """It should evaluate against today when no date is given"""
        self.assertTrue(PromoCodeFactory().is_active())

    def test_promo_without_end_date_is_inactive(self):
        """It should not be active without an end date"""
        self.assertFalse(PromoCode().is_active(date(2024, 1, 1)))

    def test_serialize_a_promo_code(self):
        """It should serialize a PromoCode"""
        promo = PromoCodeFactory()
        data = promo.serialize()
        self.assertEqual(data["code"], promo.code)
        self.assertEqual(data["discountPercentage"], promo.discount_percentage)
        self.assertEqual(date.fromisoformat(data["startDate"]), promo.start_date)
        self.assertEqual(date.fromisoformat(data["endDate"]), promo.end_date)

    def test_discount_is_not_range_checked(self):
        """It should accept discounts outside 0-100"""
        data = PromoCodeFactory().serialize()
        data["discountPercentage"] = 250
        self.assertEqual(PromoCode().deserialize(data).discount_percentage, 250)

    def test_end_before_start_is_accepted(self):
        """It should not enforce endDate >= startDate"""
        data = PromoCodeFactory().serialize()
        data["startDate"], data["endDate"] = "2025-02-01", "2025-01-01"
        promo = PromoCode().deserialize(data)
        self.assertLess(promo.end_date, promo.start_date)

    def test_deserialize_bad_date(self):
        """It should not deserialize a non-ISO date"""
        data = PromoCodeFactory().serialize()
        data["endDate"] = "31/12/2025"
        self.assertRaises(DataValidationError, PromoCode().deserialize, data)

    def test_deserialize_numeric_string_discount(self):
        """It should accept a numeric string as a discount"""
        data = PromoCodeFactory().serialize()
        data["discountPercentage"] = "12.5"
        self.assertEqual(PromoCode().deserialize(data).discount_percentage, 12.5)


######################################################################
#  U S E R   T E S T   C A S E S
######################################################################
class TestUserModel(TestCase):
    """Test Cases for User"""

    def test_serialize_a_user(self):
        """It should serialize a User"""
        user = UserFactory()
        data = user.serialize()
        self.assertEqual(data["id"], user.id)
        self.assertEqual(data["firstName"], user.first_name)
        self.assertEqual(data["lastName"], user.last_name)
        self.assertEqual(data["email"], user.email)
        self.assertEqual(
            set(data["socialMedia"].keys()), {"twitter", "linkedin", "instagram"}
        )
        self.assertIsNone(data["socialMedia"]["linkedin"])
        self.assertEqual(data["promoCode"], user.promo_code.serialize())

    def test_deserialize_a_user(self):
        """It should de-serialize a User"""
        user = User().deserialize(user_payload())
        self.assertEqual(user.id, "u1")
        self.assertEqual(user.full_name, "Ada Lovelace")
        self.assertEqual(user.social_media["twitter"], "@ada")
        self.assertIsNone(user.social_media["instagram"])
        self.assertEqual(user.promo_code.code, "ADA20")
        self.assertEqual(user.promo_code.end_date, date(2025, 1, 31))

    def test_deserialize_missing_data(self):
        """It should not deserialize a User with missing data"""
        data = user_payload()
        del data["promoCode"]
        self.assertRaises(DataValidationError, User().deserialize, data)

    def test_deserialize_bad_data(self):
        """It should not deserialize bad data"""
        self.assertRaises(DataValidationError, User().deserialize, "this is not a dictionary")
        self.assertRaises(DataValidationError, User().deserialize, user_payload(firstName=42))
        self.assertRaises(DataValidationError, User().deserialize, user_payload(promoCode="X"))

    def test_deserialize_unknown_platform(self):
        """It should reject an unknown social platform"""
        data = user_payload(socialMedia={"myspace": "@ada"})
        self.assertRaises(DataValidationError, User().deserialize, data)

    def test_blank_social_handle_is_absent(self):
        """It should store a blank social handle as absent"""
        user = UserFactory()
        user.set_social("twitter", "   ")
        self.assertIsNone(user.social_media["twitter"])

    def test_validate_required_fields(self):
        """It should list the empty required fields"""
        user = User(id=new_id())
        with self.assertRaises(DataValidationError) as ctx:
            user.validate()
        message = str(ctx.exception)
        for field in ("firstName", "lastName", "email", "promoCode.code", "promoCode.endDate"):
            self.assertIn(field, message)

    def test_validate_email(self):
        """It should reject an email without @"""
        user = UserFactory(email="not-an-email")
        self.assertRaises(DataValidationError, user.validate)

    def test_validate_complete_user(self):
        """It should accept a complete User"""
        UserFactory().validate()

    def test_users_compare_by_value(self):
        """It should compare Users by their serialized fields"""
        user = UserFactory()
        self.assertEqual(user, User().deserialize(user.serialize()))
        self.assertNotEqual(user, UserFactory())

    def test_new_ids_are_unique(self):
        """It should generate distinct ids"""
        self.assertEqual(len({new_id() for _ in range(100)}), 100)


######################################################################
#  P A Y M E N T   R E Q U E S T   T E S T   C A S E S
######################################################################
class TestPaymentRequestModel(TestCase):
    """Test Cases for PaymentRequest"""

    def test_serialize_a_payment(self):
        """It should serialize a PaymentRequest"""
        payment = PaymentRequestFactory()
        data = payment.serialize()
        self.assertEqual(data["id"], payment.id)
        self.assertEqual(data["userId"], payment.user_id)
        self.assertEqual(data["userName"], payment.user_name)
        self.assertEqual(data["amount"], payment.amount)
        self.assertEqual(data["status"], "PENDING")
        self.assertEqual(date.fromisoformat(data["date"]), payment.date)
        self.assertIsNone(data["receiptImage"])

    def test_deserialize_a_payment(self):
        """It should de-serialize a PaymentRequest"""
        data = PaymentRequestFactory(status=PaymentStatus.PAID).serialize()
        payment = PaymentRequest().deserialize(data)
        self.assertEqual(payment.status, PaymentStatus.PAID)
        self.assertEqual(payment.serialize(), data)

    def test_deserialize_defaults_to_pending(self):
        """It should default a missing status to PENDING"""
        data = PaymentRequestFactory().serialize()
        del data["status"]
        self.assertEqual(PaymentRequest().deserialize(data).status, PaymentStatus.PENDING)

    def test_deserialize_non_positive_amount(self):
        """It should not deserialize a zero or negative amount"""
        data = PaymentRequestFactory().serialize()
        data["amount"] = 0
        self.assertRaises(DataValidationError, PaymentRequest().deserialize, data)

    def test_deserialize_missing_user(self):
        """It should not deserialize a payment without userId"""
        data = PaymentRequestFactory().serialize()
        del data["userId"]
        self.assertRaises(DataValidationError, PaymentRequest().deserialize, data)

    def test_parse_status(self):
        """It should parse statuses case-insensitively"""
        self.assertEqual(PaymentStatus.parse("approved"), PaymentStatus.APPROVED)
        self.assertEqual(PaymentStatus.parse(PaymentStatus.PAID), PaymentStatus.PAID)
        self.assertRaises(DataValidationError, PaymentStatus.parse, "REFUNDED")
