"""
OpenRouter client for photo description and historical image generation.

Both calls are best-effort: failures are returned as values with an ``error``
field instead of raising, so the scene endpoint can degrade gracefully.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import httpx
import structlog

from ..config import Settings, settings as default_settings

logger = structlog.get_logger()

VISION_PROMPT = """Analyze this image and respond in JSON format:
{
  "landscape": "description of terrain, horizon, water, vegetation, sky, viewing angle",
  "hasPerson": true/false,
  "personDetails": "if person present: gender, approximate age, pose, position in frame, facial features to preserve"
}
Be concise but specific. Response ONLY the JSON, no other text."""

_CODE_FENCE = re.compile(r"```json\n?|\n?```")


@dataclass
class ViewAnalysis:
    """Description of the uploaded photo."""

    view_description: str = ""
    has_person: bool = False
    person_description: str = ""
    error: Optional[str] = None


@dataclass
class GeneratedImage:
    """Result of an image-generation call; at most one of url/base64 is set."""

    url: Optional[str] = None
    base64: Optional[str] = None
    error: Optional[str] = None


def parse_view_analysis(content: str) -> ViewAnalysis:
    """Parse the vision model's JSON answer, keeping raw text when it is not JSON."""
    try:
        parsed = json.loads(_CODE_FENCE.sub("", content).strip())
    except json.JSONDecodeError:
        return ViewAnalysis(view_description=content)

    if not isinstance(parsed, dict):
        return ViewAnalysis(view_description=content)

    landscape = parsed.get("landscape")
    person_details = parsed.get("personDetails")
    return ViewAnalysis(
        view_description=landscape if isinstance(landscape, str) else "",
        has_person=parsed.get("hasPerson") is True,
        person_description=person_details if isinstance(person_details, str) else "",
    )


def first_message(data: Any) -> Optional[dict[str, Any]]:
    """The first choice's message of a chat completion body, if well-formed."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    return message if isinstance(message, dict) else None


def _split_image_url(url: str) -> Tuple[Optional[str], Optional[str]]:
    if url.startswith("data:image"):
        return None, url.partition(",")[2] or None
    return url, None


def extract_image(message: dict[str, Any]) -> Tuple[Optional[str], Optional[str]]:
    """
    Find the first generated image in a chat completion message.

    Images are returned in ``message.images``; some providers put them in a
    list-valued ``message.content`` instead.

    Returns:
        (url, base64) with at most one of them set
    """
    for key in ("images", "content"):
        parts = message.get(key)
        if not isinstance(parts, list):
            continue
        for part in parts:
            if not isinstance(part, dict) or part.get("type") != "image_url":
                continue
            image_url = part.get("image_url")
            url = image_url.get("url") if isinstance(image_url, dict) else None
            if isinstance(url, str) and url:
                return _split_image_url(url)
    return None, None


class OpenRouterClient:
    """Async client for the vision and image models behind OpenRouter."""

    def __init__(
        self,
        api_key: str,
        config: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.config = config or default_settings
        self.base_url = self.config.openrouter_base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Lazy init async client"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.config.request_timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> OpenRouterClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    def _headers(self) -> dict[str, str | bytes]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.config.openrouter_site_name,
            # header values go out as ASCII unless given as bytes
            "X-Title": self.config.openrouter_app_title.encode("utf-8"),
        }

    async def _post_completion(self, body: dict[str, Any]) -> httpx.Response:
        client = await self._get_client()
        return await client.post(f"{self.base_url}/chat/completions", json=body, headers=self._headers())

    async def describe_view(self, image_base64: str) -> ViewAnalysis:
        """Describe the landscape and any person in a JPEG photo."""
        body = {
            "model": self.config.vision_model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": VISION_PROMPT},
                        {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"}},
                    ],
                }
            ],
            "max_tokens": self.config.vision_max_tokens,
        }

        try:
            response = await self._post_completion(body)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as exc:
            logger.error("Vision request failed", error=str(exc))
            return ViewAnalysis(error=str(exc))
        except ValueError as exc:
            logger.error("Vision response was not JSON", error=str(exc))
            return ViewAnalysis(error="invalid vision response")

        message = first_message(data)
        if message is None:
            logger.error("Vision response had no message")
            return ViewAnalysis(error="invalid vision response")

        content = message.get("content")
        return parse_view_analysis(content if isinstance(content, str) else "")

    async def generate_image(
        self,
        prompt: str,
        image_base64: Optional[str] = None,
        edit_instruction: Optional[str] = None,
    ) -> GeneratedImage:
        """
        Generate a historical image.

        Args:
            prompt: Scene prompt, used on its own when no photo is given
            image_base64: Optional JPEG photo to edit
            edit_instruction: Instruction sent with the photo

        Returns:
            GeneratedImage with a url, base64 payload or error
        """
        if image_base64:
            content: Any = [
                {"type": "image_url", "image_url": {"url": f"data:image/jpeg;base64,{image_base64}"}},
                {"type": "text", "text": edit_instruction or prompt},
            ]
        else:
            content = f"Generate a photorealistic image: {prompt}"

        body = {
            "model": self.config.image_model,
            "modalities": ["text", "image"],
            "messages": [{"role": "user", "content": content}],
        }

        try:
            response = await self._post_completion(body)
        except httpx.HTTPError as exc:
            logger.error("Image generation request failed", error=str(exc))
            return GeneratedImage(error="Could not connect to the image generation API")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if response.is_error:
            error = data.get("error") if isinstance(data, dict) else None
            message = error.get("message") if isinstance(error, dict) else None
            if not isinstance(message, str):
                message = None
            logger.error("Image generation failed", status=response.status_code, error=message)
            return GeneratedImage(error=message or "Image generation failed")

        message = first_message(data)
        if message is None:
            return GeneratedImage(error="The model did not generate an image")

        url, image_b64 = extract_image(message)
        if not url and not image_b64:
            return GeneratedImage(error="The model did not generate an image")

        return GeneratedImage(url=url, base64=image_b64)
