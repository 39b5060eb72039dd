"""
FreestyleHelper - API Route Tests

End-to-end tests for the FastAPI application (src/main.py, src/routes/).
Rhyme sources are replaced with httpx mock transports.  Validates:
- /api/generate_song success shape for English and Swedish
- Language validation (400 with the error shape)
- Unexpected failures become a 500 with the error shape
- A Swedish 404 degrades to empty suggestions and a "not found" note
- /api/rhymes single-word lookups, including cache reuse
- /api/structures, /api/schemes and /api/health
- The HTML page and static assets
"""

from unittest.mock import patch

from src.services.song_structures import SEED_WORDS
from tests.conftest import rhyme_page

EN_RESULTS = {
    "rel_rhy": ["time", "rhyme", "climb", "prime", "lime", "mime", "chime"],
}


# ===========================================================================
# /api/generate_song
# ===========================================================================


class TestGenerateSong:
    def test_english_sixteen_bar_verse(self, make_client):
        client = make_client(en_results=EN_RESULTS)
        resp = client.get(
            "/api/generate_song",
            params={"lang": "en", "structure": "16 Bar Verse", "scheme": "AAAA"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "success"
        assert data["language"] == "en"

        parts = data["song"]["parts"]
        assert len(parts) == 1
        assert parts[0]["type"] == "Verse"
        assert parts[0]["bars"] == 16
        assert parts[0]["rhymeScheme"]["scheme"] == ["A"] * 16
        assert len(parts[0]["lines"]) == 16

        line = parts[0]["lines"][0]
        assert set(line) == {
            "index",
            "rhymeGroup",
            "seedWord",
            "rhymeSuggestions",
            "visualLength",
            "note",
        }
        assert len(line["rhymeSuggestions"]) <= 5

    def test_names_are_case_insensitive(self, make_client):
        client = make_client(en_results=EN_RESULTS)
        resp = client.get(
            "/api/generate_song",
            params={"lang": "en", "structure": "16 bar verse", "scheme": "aaaa"},
        )
        data = resp.json()
        assert data["song"]["name"] == "16 Bar Verse"
        assert data["song"]["parts"][0]["rhymeScheme"]["name"] == "AAAA"

    def test_swedish_scaffold(self, make_client):
        pages = {}
        for word in SEED_WORDS["sv"]:
            pages[word] = rhyme_page([f"{word}rim{i}" for i in range(6)])
        client = make_client(sv_pages=pages)
        resp = client.get("/api/generate_song", params={"lang": "sv", "structure": "8 Bar Hook"})
        assert resp.status_code == 200
        lines = resp.json()["song"]["parts"][0]["lines"]
        for line in lines:
            assert line["rhymeSuggestions"]
            for suggestion in line["rhymeSuggestions"]:
                assert suggestion.startswith(line["seedWord"])

    def test_swedish_not_found_degrades_gracefully(self, make_client):
        client = make_client(sv_pages={})  # every word 404s
        resp = client.get(
            "/api/generate_song",
            params={"lang": "sv", "structure": "16 Bar Verse", "scheme": "AAAA"},
        )
        assert resp.status_code == 200
        for line in resp.json()["song"]["parts"][0]["lines"]:
            assert line["rhymeSuggestions"] == []
            assert line["note"] == "Ordet hittades inte i rimlexikonet."

    def test_invalid_language(self, make_client):
        resp = make_client().get("/api/generate_song", params={"lang": "xx"})
        assert resp.status_code == 400
        data = resp.json()
        assert data["status"] == "error"
        assert '"en"' in data["message"] and '"sv"' in data["message"]

    def test_missing_language(self, make_client):
        resp = make_client().get("/api/generate_song")
        assert resp.status_code == 400
        assert resp.json()["status"] == "error"

    def test_unexpected_failure_is_500(self, make_client):
        client = make_client()
        with patch("src.routes.api.generate_song", side_effect=RuntimeError("boom")):
            resp = client.get("/api/generate_song", params={"lang": "en"})
        assert resp.status_code == 500
        assert resp.json() == {"status": "error", "message": "Internal server error"}


# ===========================================================================
# /api/rhymes
# ===========================================================================


class TestRhymes:
    def test_swedish_lookup_then_cache(self, make_client):
        client = make_client(sv_pages={"tid": rhyme_page(["sid", "vid", "strid", "frid", "glid"])})
        first = client.get("/api/rhymes", params={"lang": "sv", "word": " Tid "}).json()
        second = client.get("/api/rhymes", params={"lang": "sv", "word": "tid"}).json()
        assert first["word"] == "tid"
        assert first["source"] == "live"
        assert second["source"] == "cache"
        assert sorted(first["rhymes"]) == sorted(second["rhymes"])

    def test_limit(self, make_client):
        client = make_client(en_results=EN_RESULTS)
        data = client.get("/api/rhymes", params={"lang": "en", "word": "dime", "limit": 2}).json()
        assert len(data["rhymes"]) <= 2

    def test_word_required(self, make_client):
        resp = make_client().get("/api/rhymes", params={"lang": "en"})
        assert resp.status_code == 422

    def test_invalid_language(self, make_client):
        resp = make_client().get("/api/rhymes", params={"lang": "de", "word": "zeit"})
        assert resp.status_code == 400


# ===========================================================================
# Templates, health and pages
# ===========================================================================


class TestListings:
    def test_structures(self, make_client):
        data = make_client().get("/api/structures").json()
        names = [s["name"] for s in data["structures"]]
        assert "16 Bar Verse" in names

    def test_schemes(self, make_client):
        data = make_client().get("/api/schemes").json()
        names = [s["name"] for s in data["schemes"]]
        assert "AAAA" in names
        assert all(s["description"] for s in data["schemes"])


class TestHealthAndPages:
    def test_health(self, make_client):
        client = make_client(sv_pages={"dag": rhyme_page(["lag"])})
        client.get("/api/rhymes", params={"lang": "sv", "word": "dag"})
        data = client.get("/api/health").json()
        assert data["status"] == "ok"
        assert data["languages"] == ["en", "sv"]
        assert data["swedish_cache_entries"] == 1

    def test_home_page(self, make_client):
        resp = make_client().get("/")
        assert resp.status_code == 200
        assert "FreestyleHelper" in resp.text
        assert "16 Bar Verse" in resp.text

    def test_static_client_script(self, make_client):
        resp = make_client().get("/static/client.js")
        assert resp.status_code == 200
        assert "/api/generate_song" in resp.text
