import os

os.environ["TESTING"] = "true"

import pytest

from umpbot.app import app
from umpbot.extensions import cache

CORPUS_FILES = [
    "League-Bylaws.pdf",
    "Weather-Policy-rev-Feb-2023.pdf",
    "TieBreakerS2013.pdf",
    "Spring/Spring-ALL-LEAGUE-RULES.pdf",
    "Spring/Spring-Schedule.pdf",
    "Spring/Teeball/Tee-Ball-I-U6-Rules.pdf",
    "Spring/Teeball/Tee-Ball-II-U6-Rules.pdf",
    "Spring/Teeball/Tee-Ball-I-U8-Rules.pdf",
    "Spring/Baseball/Baseball-U10-Rules.pdf",
    "Spring/Baseball/Baseball-ALL-LEAGUE-RULES.pdf",
    "Fall/Fall-Schedule.pdf",
    "Fall/Teeball/Tee-Ball-I-U6-Fall.pdf",
]


class FakeStore:
    """In-memory stand-in for the key-value cache backend."""

    def __init__(self):
        self.data = {}
        self.set_calls = 0

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.set_calls += 1
        self.data[key] = value
        return True


class CountingExtractor:
    """Fake PDF extractor that returns the file bytes as text and counts calls."""

    def __init__(self):
        self.calls = 0

    def __call__(self, data):
        self.calls += 1
        return data.decode("utf-8")


@pytest.fixture
def corpus_root(tmp_path):
    """Builds a small season/sport document tree and returns its root."""
    root = tmp_path / "UmpBot"
    for relative in CORPUS_FILES:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(f"[{relative}]".encode("utf-8"))
    (root / "field-guide.txt").write_text("Knowledge: infield fly applies.\n", encoding="utf-8")
    (root / "notes.TXT").write_text("Knowledge: pitch counts.\n", encoding="utf-8")
    # Only root-level text files are knowledge files
    (root / "Spring" / "ignored.txt").write_text("nested", encoding="utf-8")
    return root


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def counting_extractor():
    return CountingExtractor()


@pytest.fixture
def client(corpus_root, monkeypatch):
    """Provides a test client whose document root is the temporary corpus."""
    app.config["TESTING"] = True
    monkeypatch.setitem(app.config, "UMPBOT_PDF_ROOT", str(corpus_root))
    monkeypatch.setitem(app.config, "GEMINI_API_KEY", "test-key")
    monkeypatch.setitem(app.config, "UMPBOT_TEXT_CACHE_ENABLED", True)

    with app.test_client() as test_client, app.app_context():
        cache.clear()
        yield test_client
