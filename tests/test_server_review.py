"""Tests for review-related API endpoints."""

import sys
import tempfile
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from fastapi.testclient import TestClient
from server.app import app
from server.config import Settings
from server.dependencies import get_runtime, get_settings, reset_runtime
from server.runtime import Runtime, RuntimePaths
from wordpal.messages import (
    FAILED_DB_INIT_MESSAGE,
    FAILED_DB_WRITE_MESSAGE,
    GENERIC_RUNTIME_ERR_MESSAGE,
)
from wordpal.scheduler import DelaySchedule


# ============================================================================
# Helpers
# ============================================================================

def _make_settings(tmp_dir: Path) -> Settings:
    return Settings(
        db_path=tmp_dir / 'words.txt',
        rng_seed=12345,
        schedule=DelaySchedule(),
    )


def _write_words(settings: Settings, lines: list):
    settings.db_path.write_text(''.join(line + '\n' for line in lines), encoding='utf-8')


def _client(settings: Settings) -> TestClient:
    app.dependency_overrides[get_settings] = lambda: settings
    return TestClient(app)


def _cleanup():
    app.dependency_overrides.clear()
    reset_runtime()


class _BrokenRuntime(Runtime):
    def get_session(self):
        raise RuntimeError("session factory exploded")


# ============================================================================
# Tests: /review/current
# ============================================================================

def test_current_word_draws_once():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, ["uno;; one", "dos;; two", "tres;; three"])
        try:
            client = _client(settings)
            first = client.get("/review/current")
            assert first.status_code == 200
            body = first.json()
            assert body['exhausted'] is False
            assert (body['word'], body['translation']) in {
                ("uno", "one"), ("dos", "two"), ("tres", "three"),
            }
            # Same word until an outcome is recorded
            assert client.get("/review/current").json() == body
        finally:
            _cleanup()


def test_current_word_exhausted():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, ["uno;; one;; 1;; 4000000000"])
        try:
            client = _client(settings)
            resp = client.get("/review/current")
            assert resp.status_code == 200
            assert resp.json() == {'exhausted': True, 'word': None, 'translation': None}
        finally:
            _cleanup()


def test_missing_database_returns_503():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        try:
            client = _client(settings)
            resp = client.get("/review/current")
            assert resp.status_code == 503
            assert FAILED_DB_INIT_MESSAGE in resp.json()['detail']
        finally:
            _cleanup()


def test_undecodable_database_returns_503():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        settings.db_path.write_bytes(b"\xff\xfe;; bad\n")
        try:
            client = _client(settings)
            resp = client.get("/review/current")
            assert resp.status_code == 503
            assert FAILED_DB_INIT_MESSAGE in resp.json()['detail']
        finally:
            _cleanup()


def test_unexpected_open_error_returns_500():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        broken = _BrokenRuntime(
            RuntimePaths(db_path=settings.db_path),
            schedule=settings.schedule,
            rng_seed=settings.rng_seed,
        )
        try:
            app.dependency_overrides[get_runtime] = lambda: broken
            client = TestClient(app)
            resp = client.get("/stats")
            assert resp.status_code == 500
            assert resp.json()['detail'] == GENERIC_RUNTIME_ERR_MESSAGE
        finally:
            _cleanup()


# ============================================================================
# Tests: /review/outcome
# ============================================================================

def test_outcome_advances_and_persists():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, ["uno;; one", "dos;; two"])
        try:
            client = _client(settings)
            client.get("/review/current")
            resp = client.post("/review/outcome", json={"correct": True})
            assert resp.status_code == 200
            assert resp.json()['exhausted'] is False

            resp = client.post("/review/outcome", json={"correct": False})
            assert resp.status_code == 200
            assert resp.json()['exhausted'] is True

            lines = settings.db_path.read_text(encoding='utf-8').splitlines()
            iterations = sorted(int(line.split(';; ')[2]) for line in lines)
            assert iterations == [0, 1]
        finally:
            _cleanup()


def test_outcome_without_current_word_returns_409():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, ["uno;; one"])
        try:
            client = _client(settings)
            resp = client.post("/review/outcome", json={"correct": True})
            assert resp.status_code == 409
        finally:
            _cleanup()


def test_outcome_requires_bool():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, ["uno;; one"])
        try:
            client = _client(settings)
            resp = client.post("/review/outcome", json={})
            assert resp.status_code == 422
        finally:
            _cleanup()


def test_outcome_write_failure_returns_500():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, ["uno;; one", "dos;; two"])
        try:
            client = _client(settings)
            client.get("/review/current")

            def boom():
                raise OSError("read-only file system")

            session = get_runtime(settings).get_session()
            session.store.persist = boom

            resp = client.post("/review/outcome", json={"correct": True})
            assert resp.status_code == 500
            assert FAILED_DB_WRITE_MESSAGE in resp.json()['detail']

            # The change stays in memory and the next word is on display
            stats = client.get("/stats").json()
            assert stats['pending'] == 1
            assert client.get("/review/current").json()['exhausted'] is False
        finally:
            _cleanup()


# ============================================================================
# Tests: /stats
# ============================================================================

def test_stats():
    with tempfile.TemporaryDirectory() as tmp:
        settings = _make_settings(Path(tmp))
        _write_words(settings, [
            "uno;; one",
            "dos;; two;; 2;; 4000000000",
            "not a word line",
        ])
        try:
            client = _client(settings)
            resp = client.get("/stats")
            assert resp.status_code == 200
            assert resp.json() == {
                'total': 2,
                'available': 1,
                'pending': 1,
                'skipped_lines': 1,
                'by_iteration': {'0': 1, '2': 1},
            }
        finally:
            _cleanup()
