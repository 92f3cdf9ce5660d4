"""
Test cases for the User Registry
"""

from unittest import TestCase
from datetime import date
from console.models import PromoCode, User
from console.registry import DELETE_CONFIRMATION, UserRegistry
from tests.factories import UserFactory


def accept(_message):
    """Confirmation that always says yes"""
    return True


def decline(_message):
    """Confirmation that always says no"""
    return False


######################################################################
#  U S E R   R E G I S T R Y
######################################################################
class TestUserRegistry(TestCase):
    """Test Cases for UserRegistry"""

    def setUp(self):
        self.registry = UserRegistry()

    def test_save_appends_new_users_in_order(self):
        """It should append new Users in insertion order"""
        users = UserFactory.create_batch(3)
        for user in users:
            self.registry.save_user(user)
        self.assertEqual([u.id for u in self.registry.list_users()], [u.id for u in users])

    def test_save_then_replace(self):
        """It should keep a single record when the same id is saved twice"""
        self.registry.save_user(UserFactory(id="x", first_name="Old"))
        users = self.registry.list_users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].id, "x")

        self.registry.save_user(UserFactory(id="x", first_name="New"))
        users = self.registry.list_users()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].first_name, "New")

    def test_replace_is_a_full_overwrite(self):
        """It should not inherit fields from the replaced record"""
        self.registry.save_user(
            UserFactory(id="x", social_media={"twitter": "@old", "linkedin": "in/old"})
        )
        replacement = User(
            id="x",
            first_name="Only",
            last_name="Name",
            email="only@example.com",
            promo_code=PromoCode("P", 5, date(2025, 1, 1), date(2025, 2, 1)),
        )
        self.registry.save_user(replacement)
        stored = self.registry.find_user("x")
        self.assertEqual(stored, replacement)
        self.assertIsNone(stored.social_media["twitter"])
        self.assertIsNone(stored.social_media["linkedin"])

    def test_ids_stay_unique(self):
        """It should never hold two Users with the same id"""
        for user_id in ["a", "b", "a", "c", "b", "a"]:
            self.registry.save_user(UserFactory(id=user_id))
        ids = [u.id for u in self.registry.list_users()]
        self.assertEqual(sorted(ids), ["a", "b", "c"])
        self.assertEqual(ids, ["a", "b", "c"])

    def test_replace_keeps_position(self):
        """It should replace a User in place"""
        for user_id in ["a", "b", "c"]:
            self.registry.save_user(UserFactory(id=user_id))
        self.registry.save_user(UserFactory(id="b", first_name="Middle"))
        users = self.registry.list_users()
        self.assertEqual(users[1].id, "b")
        self.assertEqual(users[1].first_name, "Middle")

    def test_returned_users_are_copies(self):
        """It should not let callers change stored Users"""
        self.registry.save_user(UserFactory(id="x", first_name="Stored"))
        copy_of_user = self.registry.list_users()[0]
        copy_of_user.first_name = "Changed"
        copy_of_user.promo_code.code = "HACKED"
        stored = self.registry.find_user("x")
        self.assertEqual(stored.first_name, "Stored")
        self.assertNotEqual(stored.promo_code.code, "HACKED")

    def test_saved_candidate_is_copied(self):
        """It should not track later changes to the saved object"""
        user = UserFactory(id="x", first_name="Saved")
        self.registry.save_user(user)
        user.first_name = "Changed"
        self.assertEqual(self.registry.find_user("x").first_name, "Saved")

    def test_delete_is_idempotent(self):
        """It should treat a second delete of the same id as a no-op"""
        self.registry.save_user(UserFactory(id="keep"))
        self.registry.save_user(UserFactory(id="gone"))
        self.assertTrue(self.registry.delete_user("gone", accept))
        after_first = self.registry.list_users()
        self.assertTrue(self.registry.delete_user("gone", accept))
        self.assertEqual(self.registry.list_users(), after_first)
        self.assertEqual([u.id for u in after_first], ["keep"])

    def test_delete_declined(self):
        """It should leave the registry untouched when deletion is declined"""
        for user in UserFactory.create_batch(2):
            self.registry.save_user(user)
        before = self.registry.list_users()
        self.assertFalse(self.registry.delete_user(before[0].id, decline))
        self.assertEqual(self.registry.list_users(), before)

    def test_delete_asks_with_message(self):
        """It should ask for confirmation with the delete message"""
        asked = []
        self.registry.delete_user("nobody", lambda message: asked.append(message) or False)
        self.assertEqual(asked, [DELETE_CONFIRMATION])

    def test_find_missing_user(self):
        """It should return None for an unknown id"""
        self.assertIsNone(self.registry.find_user("missing"))

    def test_search_users(self):
        """It should search by name or email, ignoring case"""
        self.registry.save_user(UserFactory(first_name="Alex", last_name="Johnson", email="a@x.io"))
        self.registry.save_user(UserFactory(first_name="Sarah", last_name="Miller", email="s@x.io"))
        self.assertEqual([u.first_name for u in self.registry.search_users("JOHN")], ["Alex"])
        self.assertEqual([u.first_name for u in self.registry.search_users("s@x")], ["Sarah"])
        self.assertEqual([u.first_name for u in self.registry.search_users("alex johnson")], ["Alex"])
        self.assertEqual(len(self.registry.search_users("")), 2)
        self.assertEqual(self.registry.search_users("nobody"), [])

    def test_clear(self):
        """It should remove all Users"""
        self.registry.save_user(UserFactory())
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)
