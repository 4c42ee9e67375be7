"""Unit tests for the create_user CLI script."""

import contextlib
import io
import unittest
from unittest.mock import patch

from sqlalchemy.orm import sessionmaker

from app.core.config import Settings
from app.core.database import build_engine
from app.core.security import verify_password
from app.models import Base, User
from app.scripts import create_user

SETTINGS = Settings(_env_file=None, BCRYPT_ROUNDS=4)


class TestCreateUserScript(unittest.TestCase):

    def setUp(self) -> None:
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(bind=self.engine, autoflush=False)

        @contextlib.contextmanager
        def session_scope():
            db = self.SessionTesting()
            try:
                yield db
                db.commit()
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

        patches = [
            patch.object(create_user, "session_scope", session_scope),
            patch.object(create_user, "get_settings", return_value=SETTINGS),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def tearDown(self) -> None:
        self.engine.dispose()

    def _run(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = create_user.main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_admin(self) -> None:
        code, out, _ = self._run("Site Admin", "Admin@Example.com", "long-enough-pw", "admin")
        self.assertEqual(code, 0)
        self.assertIn("admin@example.com", out)
        db = self.SessionTesting()
        try:
            user = db.query(User).one()
            self.assertEqual(user.role, "admin")
            self.assertEqual(user.email, "admin@example.com")
            self.assertTrue(verify_password("long-enough-pw", user.password_hash))
        finally:
            db.close()

    def test_duplicate_email_fails(self) -> None:
        self._run("Site Admin", "admin@example.com", "long-enough-pw", "admin")
        code, _, err = self._run("Someone", "admin@example.com", "long-enough-pw")
        self.assertEqual(code, 1)
        self.assertIn("already exists", err)

    def test_short_password_fails(self) -> None:
        code, _, err = self._run("Site Admin", "admin@example.com", "short")
        self.assertEqual(code, 1)
        self.assertIn("Password must be", err)

    def test_invalid_email_fails(self) -> None:
        code, _, _ = self._run("Site Admin", "not-an-email", "long-enough-pw")
        self.assertEqual(code, 1)


if __name__ == "__main__":
    unittest.main()
