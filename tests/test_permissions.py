"""Tests for event permission checks."""

import unittest

from ecovolunteer.errors import AuthorizationDenied
from ecovolunteer.events.permissions import (
    is_admin,
    is_organizer_or_admin,
    require_organizer_or_admin,
)
from ecovolunteer.user.models import UserSession

EVENT = {"organizer": "org"}


class PermissionsTestCase(unittest.TestCase):
    def test_is_admin(self) -> None:
        self.assertTrue(is_admin({"role": "admin"}))
        self.assertFalse(is_admin({"role": "organizer"}))
        self.assertFalse(is_admin(None))

    def test_organizer_may_manage(self) -> None:
        self.assertTrue(is_organizer_or_admin(EVENT, {"id": "org", "role": "user"}))

    def test_session_user_is_matched_by_uid(self) -> None:
        user = UserSession({"role": "user"}, uid="org")
        self.assertTrue(is_organizer_or_admin(EVENT, user))

    def test_admin_may_manage_any_event(self) -> None:
        self.assertTrue(is_organizer_or_admin(EVENT, {"id": "x", "role": "admin"}))

    def test_organizer_role_alone_is_not_enough(self) -> None:
        user = {"id": "x", "role": "organizer"}
        self.assertFalse(is_organizer_or_admin(EVENT, user))
        with self.assertRaises(AuthorizationDenied):
            require_organizer_or_admin(EVENT, user, "delete")

    def test_anonymous_user(self) -> None:
        self.assertFalse(is_organizer_or_admin(EVENT, None))
        self.assertFalse(is_organizer_or_admin({"organizer": None}, {"role": "user"}))


if __name__ == "__main__":
    unittest.main()
