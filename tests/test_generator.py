"""Tests for generator.py: song ideas and podcast keywords from a chat model."""

import asyncio
import json

import httpx

from generator import CHAT_COMPLETIONS_URL, TermGenerator, parse_json_array
from models import SongIdea


def _reply(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _generator(response, requests=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return response

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TermGenerator(client, api_key="sk-test", model="gpt-4o-mini")


class TestParseJsonArray:

    def test_plain_array(self):
        assert parse_json_array('["a", "b"]') == ["a", "b"]

    def test_strips_code_fences(self):
        text = '```json\n[{"title": "Imagine", "artist": "John Lennon"}]\n```'
        assert parse_json_array(text) == [{"title": "Imagine", "artist": "John Lennon"}]

    def test_surrounding_prose(self):
        assert parse_json_array('Sure! Here you go: ["calm"] Enjoy.') == ["calm"]

    def test_invalid_json(self):
        assert parse_json_array("[not, json") == []
        assert parse_json_array("[1, 2,]") == []

    def test_no_array(self):
        assert parse_json_array('{"title": "x"}') == []
        assert parse_json_array("") == []
        assert parse_json_array(None) == []


class TestGenerateSongs:

    def test_returns_song_ideas(self):
        requests = []
        content = json.dumps([
            {"title": "Imagine", "artist": "John Lennon"},
            {"title": " Happy ", "artist": "Pharrell Williams"},
            "not an object",
            {"title": "", "artist": ""},
        ])
        gen = _generator(_reply(content), requests)
        ideas = asyncio.run(gen.generate_songs("happy", 3))
        assert ideas == [
            SongIdea("Imagine", "John Lennon"),
            SongIdea("Happy", "Pharrell Williams"),
        ]

        request = requests[0]
        assert str(request.url) == CHAT_COMPLETIONS_URL
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body["model"] == "gpt-4o-mini"
        assert body["temperature"] == 0.7
        assert 'Generate 3 real songs suitable for the mood "happy"' in body["messages"][0]["content"]

    def test_api_error_returns_empty(self):
        gen = _generator(httpx.Response(500, json={"error": {"message": "server error"}}))
        assert asyncio.run(gen.generate_songs("happy", 3)) == []

    def test_unexpected_shape_returns_empty(self):
        gen = _generator(httpx.Response(200, json={"choices": []}))
        assert asyncio.run(gen.generate_songs("happy", 3)) == []

    def test_null_content_returns_empty(self):
        gen = _generator(_reply(None))
        assert asyncio.run(gen.generate_songs("happy", 3)) == []


class TestGeneratePodcastTerms:

    def test_trims_filters_and_caps(self):
        requests = []
        content = '["stress relief", "  calm mind ", "", "sleep", "anxiety help", "meditation", "extra"]'
        gen = _generator(_reply(content), requests)
        terms = asyncio.run(gen.generate_podcast_terms("calm"))
        assert terms == ["stress relief", "calm mind", "sleep", "anxiety help", "meditation"]
        assert json.loads(requests[0].content)["temperature"] == 0.5

    def test_failure_returns_empty(self):
        def boom(request):
            raise httpx.ConnectError("offline", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(boom))
        gen = TermGenerator(client, api_key="sk-test")
        assert asyncio.run(gen.generate_podcast_terms("calm")) == []
