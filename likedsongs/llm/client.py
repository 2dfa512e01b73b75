"""
OpenAI-backed sentiment classifier.

One call classifies a whole bucket: the prompt lists the fixed categories,
the positivity scale and every song, and the answer is constrained with a
strict JSON schema. The classifier returns the decoded JSON payload as-is;
validating it against the pydantic models is the orchestrator's job.
"""

from abc import ABC, abstractmethod
import json
from typing import Any, Dict, List, Optional

import openai
from openai import OpenAI

from likedsongs import config
from likedsongs.core import (
    CATEGORY_DESCRIPTIONS,
    ConfigurationError,
    ExternalServiceFailure,
    LibraryEntry,
    SchemaViolation,
    log_debug,
)

from .schemas import (
    POSITIVITY_MAX,
    POSITIVITY_MIN,
    RESPONSE_SCHEMA_NAME,
    build_response_schema,
)

SYSTEM_PROMPT = "You are a music sentiment categorization assistant."


def build_classification_prompt(entries: List[LibraryEntry]) -> str:
    categories = "\n".join(
        f"- {category.value}: {description}"
        for category, description in CATEGORY_DESCRIPTIONS.items()
    )
    songs = "\n".join(
        f"- {e.title} by {', '.join(e.artists)} with id: {e.id}" for e in entries
    )
    return f"""
Categorize the following songs based on their sentiment and energy. Use the following categories and descriptions:
{categories}

Also assign them a numerical positivity score ranging from extremely positive at {POSITIVITY_MAX} points
to extremely negative at {POSITIVITY_MIN} points. This should be based on the tone and lyrical content of the song.

Songs to categorize:
{songs}

Then categorize the list as a whole into one of the categories above, and choose a song from the list that
best fits the overall categorization. Copy every id exactly as given.

Be concise.
"""


class TrackClassifier(ABC):
    """Collaborator that classifies one batch of library entries."""

    @abstractmethod
    def classify(self, entries: List[LibraryEntry]) -> Any:
        """
        Return the raw decoded classifier payload for `entries`.

        The payload is expected to match llm.schemas.ClassificationResult but
        is not validated here.
        """
        raise NotImplementedError


class OpenAITrackClassifier(TrackClassifier):
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[OpenAI] = None,
    ):
        """
        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY from config)
            model: Chat model supporting json_schema structured outputs
            temperature: Sampling temperature
            client: Pre-built OpenAI client, mainly for tests
        """
        if client is None:
            api_key = api_key or config.OPENAI_API_KEY
            if not api_key:
                raise ConfigurationError("Please set OPENAI_API_KEY in the .env file.")
            client = OpenAI(api_key=api_key, timeout=config.REQUEST_TIMEOUT * 4)

        self.client = client
        self.model = model or config.OPENAI_MODEL
        self.temperature = (
            config.OPENAI_TEMPERATURE if temperature is None else temperature
        )
        self.total_requests = 0

    def classify(self, entries: List[LibraryEntry]) -> Dict[str, Any]:
        self.total_requests += 1
        log_debug(f"Classifying {len(entries)} tracks with {self.model}")

        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_classification_prompt(entries)},
                ],
                temperature=self.temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": RESPONSE_SCHEMA_NAME,
                        "schema": build_response_schema(),
                        "strict": True,
                    },
                },
            )
        except openai.APIStatusError as e:
            raise ExternalServiceFailure("openai", str(e), e.status_code) from e
        except openai.APIError as e:
            raise ExternalServiceFailure("openai", str(e)) from e

        if not response.choices:
            raise SchemaViolation(
                RESPONSE_SCHEMA_NAME, "No choices in API response", str(response)
            )

        choice = response.choices[0]
        content = choice.message.content
        if not content:
            refusal = getattr(choice.message, "refusal", None)
            raise SchemaViolation(
                RESPONSE_SCHEMA_NAME,
                f"Empty response content (finish_reason: {choice.finish_reason})",
                refusal,
            )

        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise SchemaViolation(RESPONSE_SCHEMA_NAME, str(e), content) from e
