"""Tests for the OpenRouter vision and image client."""

import json

import httpx
import pytest

from py_stenaldern.ai.openrouter import OpenRouterClient, extract_image, first_message, parse_view_analysis
from py_stenaldern.config import Settings, settings


def make_client(handler) -> OpenRouterClient:
    return OpenRouterClient("test-key", transport=httpx.MockTransport(handler))


def completion(message: dict) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": message}]})


class TestParseViewAnalysis:
    """Test parsing of the vision model answer."""

    def test_plain_json(self):
        view = parse_view_analysis('{"landscape": "lake", "hasPerson": true, "personDetails": "man, 40s"}')

        assert view.view_description == "lake"
        assert view.has_person is True
        assert view.person_description == "man, 40s"

    def test_fenced_json(self):
        view = parse_view_analysis('```json\n{"landscape": "forest", "hasPerson": false}\n```')

        assert view.view_description == "forest"
        assert view.has_person is False
        assert view.person_description == ""

    def test_free_text_is_kept(self):
        view = parse_view_analysis("A calm lake at dusk.")

        assert view.view_description == "A calm lake at dusk."
        assert view.has_person is False

    def test_non_string_fields_are_dropped(self):
        view = parse_view_analysis('{"landscape": {"terrain": "hills"}, "hasPerson": "yes", "personDetails": ["man"]}')

        assert view.view_description == ""
        assert view.has_person is False
        assert view.person_description == ""

    def test_json_array_is_kept_as_text(self):
        assert parse_view_analysis("[1, 2]").view_description == "[1, 2]"


class TestFirstMessage:
    """Test picking the message out of a completion body."""

    @pytest.mark.parametrize("data", [
        None,
        [],
        "text",
        {},
        {"choices": []},
        {"choices": "x"},
        {"choices": [None]},
        {"choices": [{"message": None}]},
        {"choices": [{"message": "hi"}]},
    ])
    def test_malformed_bodies(self, data):
        assert first_message(data) is None

    def test_well_formed(self):
        assert first_message({"choices": [{"message": {"content": "hi"}}]}) == {"content": "hi"}


class TestExtractImage:
    """Test locating the generated image in a message."""

    def test_data_url_in_images(self):
        message = {"images": [{"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}}]}
        assert extract_image(message) == (None, "AAAA")

    def test_remote_url_in_content(self):
        message = {"content": [
            {"type": "text", "text": "here you go"},
            {"type": "image_url", "image_url": {"url": "https://cdn.example/img.png"}},
        ]}
        assert extract_image(message) == ("https://cdn.example/img.png", None)

    def test_no_image(self):
        assert extract_image({"content": "Sorry, I cannot do that."}) == (None, None)


class TestDescribeView:
    """Test the vision call."""

    @pytest.mark.asyncio
    async def test_request_and_response(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["auth"] = request.headers["Authorization"]
            seen["title"] = request.headers["X-Title"]
            seen["body"] = json.loads(request.content)
            return completion({"content": '{"landscape": "harbour", "hasPerson": false}'})

        async with make_client(handler) as client:
            view = await client.describe_view("BASE64")

        assert view.view_description == "harbour"
        assert view.error is None
        assert seen["auth"] == "Bearer test-key"
        assert seen["title"] == "Stenaldern App"
        assert seen["body"]["model"] == settings.vision_model
        assert seen["body"]["max_tokens"] == settings.vision_max_tokens
        image_part = seen["body"]["messages"][0]["content"][1]
        assert image_part["image_url"]["url"] == "data:image/jpeg;base64,BASE64"

    @pytest.mark.asyncio
    async def test_failure_is_returned(self):
        async with make_client(lambda request: httpx.Response(500)) as client:
            view = await client.describe_view("BASE64")

        assert view.error is not None
        assert view.view_description == ""
        assert view.has_person is False


class TestGenerateImage:
    """Test the image generation call."""

    @pytest.mark.asyncio
    async def test_text_only_prompt(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return completion({"images": [{"type": "image_url", "image_url": {"url": "data:image/png;base64,QUJD"}}]})

        async with make_client(handler) as client:
            image = await client.generate_image("a Viking harbour")

        assert image.base64 == "QUJD"
        assert image.url is None
        assert image.error is None
        assert seen["body"]["modalities"] == ["text", "image"]
        assert seen["body"]["model"] == settings.image_model
        assert seen["body"]["messages"][0]["content"] == "Generate a photorealistic image: a Viking harbour"

    @pytest.mark.asyncio
    async def test_photo_edit(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return completion({"images": [{"type": "image_url", "image_url": {"url": "https://cdn.example/out.png"}}]})

        async with make_client(handler) as client:
            image = await client.generate_image("scene", "PHOTO", "COSTUME CHANGE ONLY")

        assert image.url == "https://cdn.example/out.png"
        content = seen["body"]["messages"][0]["content"]
        assert content[0]["image_url"]["url"] == "data:image/jpeg;base64,PHOTO"
        assert content[1] == {"type": "text", "text": "COSTUME CHANGE ONLY"}

    @pytest.mark.asyncio
    async def test_api_error_message(self):
        response = httpx.Response(402, json={"error": {"message": "Insufficient credits"}})

        async with make_client(lambda request: response) as client:
            image = await client.generate_image("scene")

        assert image.error == "Insufficient credits"
        assert image.url is None and image.base64 is None

    @pytest.mark.asyncio
    async def test_api_error_without_body(self):
        async with make_client(lambda request: httpx.Response(502, text="Bad gateway")) as client:
            image = await client.generate_image("scene")

        assert image.error == "Image generation failed"

    @pytest.mark.asyncio
    async def test_no_image_returned(self):
        async with make_client(lambda request: completion({"content": "I can only write text."})) as client:
            image = await client.generate_image("scene")

        assert image.error == "The model did not generate an image"

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            image = await client.generate_image("scene")

        assert image.error == "Could not connect to the image generation API"


class TestMalformedResponses:
    """Odd model output degrades to error values instead of raising."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"choices": [{"message": None}]},
        {"choices": [None]},
        {"choices": []},
        ["not", "a", "dict"],
    ])
    async def test_describe_view(self, body):
        async with make_client(lambda request: httpx.Response(200, json=body)) as client:
            view = await client.describe_view("BASE64")

        assert view.error == "invalid vision response"
        assert view.view_description == ""
        assert view.has_person is False

    @pytest.mark.asyncio
    async def test_describe_view_with_structured_landscape(self):
        reply = completion({"content": '{"landscape": {"terrain": "hills"}, "hasPerson": true}'})

        async with make_client(lambda request: reply) as client:
            view = await client.describe_view("BASE64")

        assert view.view_description == ""
        assert view.has_person is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"choices": [{"message": None}]},
        {"choices": [None]},
        ["not", "a", "dict"],
        {"choices": [{"message": {"images": [{"type": "image_url", "image_url": "oops"}]}}]},
    ])
    async def test_generate_image(self, body):
        async with make_client(lambda request: httpx.Response(200, json=body)) as client:
            image = await client.generate_image("scene")

        assert image.error == "The model did not generate an image"

    @pytest.mark.asyncio
    async def test_error_body_without_string_message(self):
        response = httpx.Response(400, json={"error": {"message": {"code": 1}}})

        async with make_client(lambda request: response) as client:
            image = await client.generate_image("scene")

        assert image.error == "Image generation failed"


class TestHeaders:
    """Test the attribution headers."""

    @pytest.mark.asyncio
    async def test_non_ascii_title_is_sent(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["title"] = request.headers["X-Title"]
            return completion({"images": [{"type": "image_url", "image_url": {"url": "https://cdn.example/a.png"}}]})

        config = Settings(openrouter_app_title="Stenåldern App")
        async with OpenRouterClient("test-key", config=config, transport=httpx.MockTransport(handler)) as client:
            image = await client.generate_image("scene")

        assert image.url == "https://cdn.example/a.png"
        assert seen["title"] == "Stenåldern App"
