"""LLM service for writing suggestions."""
import json
from typing import Any, Dict, Optional
from fastapi import Request
from openai import AsyncOpenAI, OpenAIError
from writespace.config import Settings
from writespace.utils.logging import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are an expert writing assistant that provides helpful, constructive "
    "feedback to improve blog posts. Focus on clarity, engagement, structure, "
    "and readability."
)

# Suggestions prompt template
SUGGESTIONS_PROMPT = """Please analyze the following blog post content and provide writing suggestions in JSON format. Return a JSON object with the following structure:
{{
    "suggestions": [
        {{
            "type": "improvement",
            "message": "Specific suggestion text",
            "category": "grammar|style|structure|clarity|engagement"
        }}
    ],
    "overallScore": number between 1-10,
    "summary": "Brief overall assessment"
}}

Content to analyze:
Title: {title}
Content: {content}"""

EMPTY_RESPONSE = {
    "suggestions": [],
    "overallScore": 7,
    "summary": "No specific suggestions available.",
}


class SuggestionError(Exception):
    """The text-generation service is unconfigured, unreachable or returned junk."""


class SuggestionService:
    """Pass-through to an OpenAI-compatible chat completion API."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.model = settings.openai_model
        self._client = client
        if self._client is None and settings.openai_api_key:
            self._client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout=settings.openai_timeout,
            )

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def suggest(self, content: str, title: Optional[str] = None) -> Dict[str, Any]:
        """
        Ask the model for feedback on a post.

        Args:
            content: Post body
            title: Post title, if any

        Returns:
            The model's JSON object, unmodified

        Raises:
            SuggestionError: no API key, request failure, or non-JSON reply
        """
        if not self.configured:
            raise SuggestionError("OpenAI API key is not configured")

        prompt = SUGGESTIONS_PROMPT.format(title=title or "No title", content=content)

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={"type": "json_object"},
                max_tokens=1000,
            )
        except OpenAIError as e:
            logger.error("Suggestion request to %s failed: %s", self.model, e)
            raise SuggestionError(str(e)) from e

        raw = response.choices[0].message.content
        if not raw:
            return dict(EMPTY_RESPONSE)

        try:
            result = json.loads(raw)
        except json.JSONDecodeError as e:
            raise SuggestionError(f"Model returned invalid JSON: {e}") from e
        if not isinstance(result, dict):
            raise SuggestionError("Model returned JSON that is not an object")
        return result


def get_suggestion_service(request: Request) -> SuggestionService:
    """Dependency returning the suggestion service built at start-up."""
    return request.app.state.suggestion_service
