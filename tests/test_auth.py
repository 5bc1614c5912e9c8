"""Tests for inkwell.services.auth: login/logout state machine and principal-role hint."""

import unittest

from support import DEFAULT_PASSWORD, create_user, make_session_factory

from inkwell.core.config import Settings
from inkwell.core.errors import InvalidCredentials
from inkwell.models import RoleName
from inkwell.services import sessions
from inkwell.services.auth import LOGIN_FAILED_MESSAGE, AuthService, principal_role
from inkwell.services.credentials import CredentialStore
from inkwell.services.rbac import RoleGraph
from inkwell.services.sessions import MemorySessionStore, SessionHandle


class TestPrincipalRole(unittest.TestCase):
    def test_precedence(self) -> None:
        self.assertEqual(principal_role(["Contributor", "Administrator"]), RoleName.ADMINISTRATOR)
        self.assertEqual(principal_role(["Contributor", "Editor"]), RoleName.EDITOR)
        self.assertEqual(principal_role(["Contributor"]), RoleName.CONTRIBUTOR)

    def test_no_roles_falls_back_to_contributor(self) -> None:
        self.assertEqual(principal_role([]), RoleName.CONTRIBUTOR)
        self.assertEqual(principal_role(["Moderator"]), RoleName.CONTRIBUTOR)


class AuthTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.store = MemorySessionStore(max_age_seconds=3600)
        self.settings = Settings(ADMIN_AREA_PATH="/admin", PUBLIC_AREA_PATH="/")
        self.auth = AuthService(CredentialStore(self.db), RoleGraph(self.db), self.settings)

    def tearDown(self) -> None:
        self.db.close()

    def new_session(self) -> SessionHandle:
        return SessionHandle(self.store)


class TestLogin(AuthTestCase):
    def test_admin_and_contributor_gets_administrator_principal(self) -> None:
        user_id = create_user(
            self.db, "boss", "boss@example.com", roles=("Administrator", "Contributor")
        )
        session = self.new_session()
        result = self.auth.login(session, "boss@example.com", DEFAULT_PASSWORD)
        self.assertEqual(result.user_id, user_id)
        self.assertEqual(result.principal_role, RoleName.ADMINISTRATOR)
        self.assertEqual(result.redirect_to, "/admin")
        self.assertFalse(result.already_authenticated)
        self.assertEqual(session.get(sessions.PRINCIPAL_ROLE), "Administrator")
        self.assertEqual(session.get(sessions.ROLES), ["Administrator", "Contributor"])
        self.assertEqual(session.get(sessions.USERNAME), "boss")
        self.assertEqual(session.get(sessions.EMAIL), "boss@example.com")
        self.assertIsNotNone(session.get(sessions.FLASH_SUCCESS))

    def test_contributor_redirects_to_public_area(self) -> None:
        create_user(self.db, "writer", "writer@example.com", roles=("Contributor",))
        result = self.auth.login(self.new_session(), "writer@example.com", DEFAULT_PASSWORD)
        self.assertEqual(result.principal_role, RoleName.CONTRIBUTOR)
        self.assertEqual(result.redirect_to, "/")

    def test_editor_redirects_to_admin_area(self) -> None:
        create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        result = self.auth.login(self.new_session(), "ed@example.com", DEFAULT_PASSWORD)
        self.assertEqual(result.redirect_to, "/admin")

    def test_login_rotates_session_id(self) -> None:
        create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        session = self.new_session()
        session.create()
        planted_id = session.session_id
        self.auth.login(session, "ed@example.com", DEFAULT_PASSWORD)
        self.assertNotEqual(session.session_id, planted_id)
        self.assertIsNone(self.store.load(planted_id))
        self.assertEqual(session.cookie_action, "set")

    def test_failures_are_identical_and_leave_session_anonymous(self) -> None:
        create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        outcomes = []
        for email, password in (
            ("ed@example.com", "wrong-password"),
            ("ghost@example.com", DEFAULT_PASSWORD),
        ):
            session = self.new_session()
            with self.assertRaises(InvalidCredentials) as ctx:
                self.auth.login(session, email, password)
            self.assertFalse(session.has(sessions.USER_ID))
            self.assertEqual(session.get(sessions.FLASH_ERROR), LOGIN_FAILED_MESSAGE)
            outcomes.append((type(ctx.exception), str(ctx.exception)))
        self.assertEqual(outcomes[0], outcomes[1])

    def test_failed_login_is_logged(self) -> None:
        with self.assertLogs("inkwell.services.auth", level="WARNING") as logs:
            with self.assertRaises(InvalidCredentials):
                self.auth.login(self.new_session(), "ghost@example.com", "whatever-password")
        self.assertIn("ghost@example.com", logs.output[0])

    def test_inactive_user_cannot_log_in(self) -> None:
        user_id = create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        CredentialStore(self.db).update_active_status(user_id, False)
        with self.assertRaises(InvalidCredentials):
            self.auth.login(self.new_session(), "ed@example.com", DEFAULT_PASSWORD)

    def test_already_authenticated_short_circuits(self) -> None:
        user_id = create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        session = self.new_session()
        self.auth.login(session, "ed@example.com", DEFAULT_PASSWORD)
        current_id = session.session_id
        result = self.auth.login(session, "someone@example.com", "anything-at-all")
        self.assertTrue(result.already_authenticated)
        self.assertEqual(result.user_id, user_id)
        self.assertEqual(result.principal_role, RoleName.EDITOR)
        self.assertEqual(session.session_id, current_id)


class TestLogout(AuthTestCase):
    def test_logout_invalidates_server_record(self) -> None:
        create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        session = self.new_session()
        self.auth.login(session, "ed@example.com", DEFAULT_PASSWORD)
        old_id = session.session_id
        self.auth.logout(session)
        self.assertIsNone(self.store.load(old_id))
        self.assertFalse(session.has(sessions.USER_ID))
        self.assertEqual(session.cookie_action, "clear")
        # A client replaying the old cookie is anonymous.
        replay = SessionHandle(self.store, old_id)
        self.assertIsNone(replay.get(sessions.USER_ID))

    def test_logout_when_anonymous_is_harmless(self) -> None:
        session = self.new_session()
        self.auth.logout(session)
        self.assertFalse(session.is_started)


if __name__ == "__main__":
    unittest.main()
