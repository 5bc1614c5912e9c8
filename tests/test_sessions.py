"""Tests for inkwell.services.sessions: the in-memory store and the per-request handle."""

import unittest
from unittest.mock import patch

from inkwell.services import sessions
from inkwell.services.sessions import MemorySessionStore, SessionHandle

class TestMemorySessionStore(unittest.TestCase):
    def test_save_load_delete(self) -> None:
        store = MemorySessionStore(max_age_seconds=60)
        store.save("sid", {"user_id": 1})
        self.assertEqual(store.load("sid"), {"user_id": 1})
        store.delete("sid")
        self.assertIsNone(store.load("sid"))
        store.delete("sid")

    def test_load_returns_a_copy(self) -> None:
        store = MemorySessionStore(max_age_seconds=60)
        store.save("sid", {"roles": ["Editor"]})
        data = store.load("sid")
        data["user_id"] = 99
        self.assertNotIn("user_id", store.load("sid"))

    def test_idle_records_expire(self) -> None:
        store = MemorySessionStore(max_age_seconds=60)
        with patch("inkwell.services.sessions.time.monotonic", return_value=1000.0):
            store.save("sid", {"user_id": 1})
        with patch("inkwell.services.sessions.time.monotonic", return_value=1030.0):
            self.assertIsNotNone(store.load("sid"))
        with patch("inkwell.services.sessions.time.monotonic", return_value=1061.0):
            self.assertIsNone(store.load("sid"))
        self.assertEqual(len(store), 0)

    def test_purge_expired(self) -> None:
        store = MemorySessionStore(max_age_seconds=60)
        with patch("inkwell.services.sessions.time.monotonic", return_value=1000.0):
            store.save("old", {})
        with patch("inkwell.services.sessions.time.monotonic", return_value=1050.0):
            store.save("fresh", {})
        with patch("inkwell.services.sessions.time.monotonic", return_value=1070.0):
            self.assertEqual(store.purge_expired(), 1)
        self.assertEqual(len(store), 1)

    def test_update_only_touches_live_records(self) -> None:
        store = MemorySessionStore(max_age_seconds=60)
        store.save("sid", {"user_id": 1})
        self.assertTrue(store.update("sid", {"user_id": 2}))
        self.assertEqual(store.load("sid"), {"user_id": 2})
        store.delete("sid")
        self.assertFalse(store.update("sid", {"user_id": 3}))
        self.assertIsNone(store.load("sid"))
        self.assertEqual(len(store), 0)

    def test_update_refuses_expired_record(self) -> None:
        with patch("inkwell.services.sessions.time.monotonic", return_value=1000.0):
            store = MemorySessionStore(max_age_seconds=60)
            store.save("sid", {"user_id": 1})
        with patch("inkwell.services.sessions.time.monotonic", return_value=1061.0):
            self.assertFalse(store.update("sid", {"user_id": 1}))
        self.assertEqual(len(store), 0)

    def test_save_sweeps_expired_records(self) -> None:
        with patch("inkwell.services.sessions.time.monotonic", return_value=0.0):
            store = MemorySessionStore(max_age_seconds=60)
            for _ in range(1000):
                SessionHandle(store).set(sessions.FLASH_ERROR, "Invalid email or password.")
        self.assertEqual(len(store), 1000)
        with patch("inkwell.services.sessions.time.monotonic", return_value=10000.0):
            SessionHandle(store).set(sessions.FLASH_ERROR, "Invalid email or password.")
        self.assertEqual(len(store), 1)

    def test_sweep_runs_at_most_once_per_max_age(self) -> None:
        with patch("inkwell.services.sessions.time.monotonic", return_value=0.0):
            store = MemorySessionStore(max_age_seconds=60)
            store.save("old", {})
        with patch("inkwell.services.sessions.time.monotonic", return_value=59.0):
            store.save("mid", {})
        with patch("inkwell.services.sessions.time.monotonic", return_value=100.0):
            self.assertEqual(store.purge_expired(), 1)
        with patch("inkwell.services.sessions.time.monotonic", return_value=130.0):
            store.save("new", {})
        # mid is expired by now, but the last sweep was under max_age ago.
        self.assertEqual(len(store), 2)


class TestSessionHandle(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemorySessionStore(max_age_seconds=3600)

    def test_fresh_handle_is_not_started(self) -> None:
        handle = SessionHandle(self.store)
        self.assertFalse(handle.is_started)
        self.assertIsNone(handle.get(sessions.USER_ID))
        self.assertEqual(handle.get("missing", "fallback"), "fallback")
        self.assertFalse(handle.has(sessions.USER_ID))
        self.assertIsNone(handle.cookie_action)
        self.assertEqual(len(self.store), 0)

    def test_first_write_starts_session(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.FLASH_ERROR, "oops")
        self.assertTrue(handle.is_started)
        self.assertEqual(handle.cookie_action, "set")
        self.assertEqual(self.store.load(handle.session_id), {sessions.FLASH_ERROR: "oops"})

    def test_create_is_idempotent(self) -> None:
        handle = SessionHandle(self.store)
        handle.create()
        first = handle.session_id
        handle.create()
        self.assertEqual(handle.session_id, first)
        self.assertEqual(len(self.store), 1)

    def test_existing_session_is_resumed(self) -> None:
        first = SessionHandle(self.store)
        first.set(sessions.USER_ID, 7)
        resumed = SessionHandle(self.store, first.session_id)
        self.assertEqual(resumed.get(sessions.USER_ID), 7)
        self.assertEqual(resumed.session_id, first.session_id)
        self.assertIsNone(resumed.cookie_action)

    def test_unknown_id_asks_client_to_clear_cookie(self) -> None:
        handle = SessionHandle(self.store, "not-a-live-session")
        self.assertFalse(handle.is_started)
        self.assertEqual(handle.cookie_action, "clear")

    def test_pop_and_remove(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.FLASH_SUCCESS, "Saved.")
        self.assertEqual(handle.pop(sessions.FLASH_SUCCESS), "Saved.")
        self.assertIsNone(handle.pop(sessions.FLASH_SUCCESS))
        self.assertEqual(self.store.load(handle.session_id), {})
        handle.remove("never-set")

    def test_has_treats_none_as_absent(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.USER_ID, None)
        self.assertFalse(handle.has(sessions.USER_ID))

    def test_regenerate_moves_data_and_kills_old_id(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.USERNAME, "alice")
        old_id = handle.session_id
        resumed = SessionHandle(self.store, old_id)
        resumed.regenerate()
        self.assertNotEqual(resumed.session_id, old_id)
        self.assertIsNone(self.store.load(old_id))
        self.assertEqual(self.store.load(resumed.session_id), {sessions.USERNAME: "alice"})
        self.assertEqual(resumed.cookie_action, "set")

    def test_destroy_clears_everything(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.USER_ID, 1)
        old_id = handle.session_id
        resumed = SessionHandle(self.store, old_id)
        resumed.destroy()
        self.assertIsNone(self.store.load(old_id))
        self.assertIsNone(resumed.get(sessions.USER_ID))
        self.assertFalse(resumed.is_started)
        self.assertEqual(resumed.cookie_action, "clear")

    def test_write_after_destroy_starts_new_session(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.USER_ID, 1)
        old_id = handle.session_id
        handle.destroy()
        handle.set(sessions.FLASH_SUCCESS, "Bye.")
        self.assertNotEqual(handle.session_id, old_id)
        self.assertEqual(handle.cookie_action, "set")
        self.assertEqual(self.store.load(handle.session_id), {sessions.FLASH_SUCCESS: "Bye."})

    def test_stale_handle_cannot_revive_destroyed_session(self) -> None:
        origin = SessionHandle(self.store)
        origin.set(sessions.USER_ID, 1)
        origin.set(sessions.FLASH_SUCCESS, "Signed in successfully.")
        sid = origin.session_id
        stale = SessionHandle(self.store, sid)
        SessionHandle(self.store, sid).destroy()

        stale.pop(sessions.FLASH_SUCCESS)
        self.assertIsNone(self.store.load(sid))
        self.assertFalse(stale.is_started)
        self.assertIsNone(stale.get(sessions.USER_ID))
        self.assertEqual(stale.cookie_action, "clear")

    def test_write_on_stale_handle_starts_clean_session(self) -> None:
        origin = SessionHandle(self.store)
        origin.set(sessions.USER_ID, 1)
        sid = origin.session_id
        stale = SessionHandle(self.store, sid)
        origin.destroy()

        stale.set(sessions.FLASH_ERROR, "oops")
        self.assertNotEqual(stale.session_id, sid)
        self.assertIsNone(self.store.load(sid))
        self.assertEqual(self.store.load(stale.session_id), {sessions.FLASH_ERROR: "oops"})
        self.assertEqual(stale.cookie_action, "set")

    def test_regenerate_on_stale_handle_drops_old_claims(self) -> None:
        origin = SessionHandle(self.store)
        origin.set(sessions.USER_ID, 1)
        sid = origin.session_id
        stale = SessionHandle(self.store, sid)
        origin.destroy()

        stale.regenerate()
        self.assertIsNone(self.store.load(sid))
        self.assertEqual(self.store.load(stale.session_id), {})
        self.assertEqual(len(self.store), 1)

    def test_claims_snapshot(self) -> None:
        handle = SessionHandle(self.store)
        handle.set(sessions.USER_ID, 3)
        handle.set(sessions.ROLES, ["Editor"])
        claims = handle.claims()
        self.assertEqual(set(claims), set(sessions.CLAIM_KEYS))
        self.assertEqual(claims[sessions.USER_ID], 3)
        self.assertEqual(claims[sessions.ROLES], ["Editor"])
        self.assertIsNone(claims[sessions.EMAIL])


if __name__ == "__main__":
    unittest.main()
