import os
import json
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional
import openai
from dotenv import load_dotenv

from ..errors import AdvisorUnavailable, UpstreamServiceError
from ..logic.constants import DEFAULT_MODEL, DEFAULT_TEMPERATURE
from ..logic.contracts import StudentProfile, TrackScore
from .prompt_builder import build_system_prompt, build_user_prompt

# Load env vars (if not already loaded)
load_dotenv()

logger = logging.getLogger(__name__)


class AIAdvisor:
    """
    Asks the OpenAI chat API to turn the heuristic ranking into
    three written recommendations.

    The client is injectable; without one, a client is built from
    OPENAI_API_KEY. Requests are never retried.
    """

    def __init__(
        self,
        client: Optional[Any] = None,
        model: Optional[str] = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        self.model = model or os.getenv("OPENAI_MODEL", DEFAULT_MODEL)
        self.temperature = temperature
        self.client = client

        if self.client is None:
            api_key = os.getenv("OPENAI_API_KEY")
            if api_key:
                options: Dict[str, Any] = {"api_key": api_key, "max_retries": 0}
                timeout = _timeout_from_env()
                if timeout is not None:
                    options["timeout"] = timeout
                self.client = openai.AsyncOpenAI(**options)

    @property
    def available(self) -> bool:
        return self.client is not None

    async def advise(
        self,
        profile: StudentProfile,
        heuristic_top: List[TrackScore],
        email: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Returns the advisor's reply parsed as a JSON object.
        Raises UpstreamServiceError on any failure.
        """
        if not self.client:
            raise AdvisorUnavailable("OpenAI API key not configured")

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                response_format={"type": "json_object"},
                messages=[
                    {"role": "system", "content": build_system_prompt()},
                    {"role": "user", "content": build_user_prompt(profile, heuristic_top, email)},
                ],
            )
        except openai.OpenAIError as e:
            raise UpstreamServiceError(f"OpenAI request failed: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise UpstreamServiceError("Empty reply from AI advisor")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            raise UpstreamServiceError(f"Malformed JSON from AI advisor: {e}") from e

        if not isinstance(parsed, dict):
            raise UpstreamServiceError("AI advisor reply is not a JSON object")

        logger.debug("AI advisor replied with %d recommendations", len(parsed.get("recommendations") or []))
        return parsed


@lru_cache(maxsize=1)
def get_advisor() -> AIAdvisor:
    """Shared advisor built from the environment."""
    return AIAdvisor()


def _timeout_from_env() -> Optional[float]:
    """OPENAI_TIMEOUT_S in seconds; unset, non-numeric or non-positive means the SDK default."""
    raw = os.getenv("OPENAI_TIMEOUT_S")
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric OPENAI_TIMEOUT_S=%r", raw)
        return None
    if timeout <= 0:
        logger.warning("Ignoring non-positive OPENAI_TIMEOUT_S=%r", raw)
        return None
    return timeout
