"""
Mock records the console starts with
"""

from console.models import PaymentRequest, User

MOCK_USERS = [
    {
        "id": "1",
        "firstName": "Alex",
        "lastName": "Johnson",
        "email": "alex.j@example.com",
        "socialMedia": {"twitter": "@alexj", "linkedin": "linkedin.com/in/alexj"},
        "promoCode": {
            "code": "NEXUS50",
            "discountPercentage": 50,
            "startDate": "2024-01-01",
            "endDate": "2024-12-31",
        },
    },
    {
        "id": "2",
        "firstName": "Sarah",
        "lastName": "Miller",
        "email": "sarah.m@example.com",
        "socialMedia": {"instagram": "@sarahpics"},
        "promoCode": {
            "code": "WELCOME10",
            "discountPercentage": 10,
            "startDate": "2024-03-15",
            "endDate": "2024-04-15",
        },
    },
]

MOCK_PAYMENTS = [
    {
        "id": "pay1",
        "userId": "1",
        "userName": "Alex Johnson",
        "amount": 1500,
        "status": "PENDING",
        "date": "2024-05-10",
    },
    {
        "id": "pay2",
        "userId": "2",
        "userName": "Sarah Miller",
        "amount": 450,
        "status": "PAID",
        "date": "2024-05-08",
    },
]


def mock_users():
    """Fresh User objects for the mock records"""
    return [User().deserialize(data) for data in MOCK_USERS]


def mock_payments():
    """Fresh PaymentRequest objects for the mock records"""
    return [PaymentRequest().deserialize(data) for data in MOCK_PAYMENTS]
