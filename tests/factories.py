"""
Test Factory to make fake objects for testing
"""

from datetime import date, timedelta
import factory
from console.models import PaymentRequest, PaymentStatus, PromoCode, User, new_id


class PromoCodeFactory(factory.Factory):
    """Creates fake promo codes that run for the next 30 days"""

    class Meta:  # pylint: disable=too-few-public-methods
        """Maps factory to data model"""

        model = PromoCode

    code = factory.Faker("bothify", text="????##", letters="ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    discount_percentage = factory.Faker("random_int", min=1, max=99)
    start_date = factory.LazyFunction(date.today)
    end_date = factory.LazyFunction(lambda: date.today() + timedelta(days=30))


class UserFactory(factory.Factory):
    """Creates fake users, each owning its own promo code"""

    class Meta:  # pylint: disable=too-few-public-methods
        """Maps factory to data model"""

        model = User

    id = factory.LazyFunction(new_id)
    first_name = factory.Faker("first_name")
    last_name = factory.Faker("last_name")
    email = factory.Faker("email")
    social_media = factory.LazyAttribute(lambda o: {"twitter": f"@{o.first_name.lower()}"})
    promo_code = factory.SubFactory(PromoCodeFactory)


class PaymentRequestFactory(factory.Factory):
    """Creates fake pending payment requests"""

    class Meta:  # pylint: disable=too-few-public-methods
        """Maps factory to data model"""

        model = PaymentRequest

    id = factory.Sequence(lambda n: f"pay{n}")
    user_id = factory.LazyFunction(new_id)
    user_name = factory.Faker("name")
    amount = factory.Faker("random_int", min=10, max=5000)
    status = PaymentStatus.PENDING
    date = factory.Faker("date_object")
    receipt_image = None
