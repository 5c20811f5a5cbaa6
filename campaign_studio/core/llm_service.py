"""
LLM Service: the single boundary between the pipeline and a text-generation API.
Every call is one prompt in, one raw text response out, with a timeout.
"""

import asyncio
import json
import random
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from campaign_studio.config import settings
from campaign_studio.core.exceptions import LLMServiceError
from campaign_studio.core.json_extraction import parse_json_response

logger = structlog.get_logger()


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    name: str = "abstract"

    @abstractmethod
    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.8,
        max_tokens: int = 2000,
    ) -> str:
        """Generate a completion from the LLM."""
        pass


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider."""

    name = "openai"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self._client = None
        self._logger = logger.bind(provider="openai")

    def _get_client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise LLMServiceError("OpenAI API key is not provided")
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.8,
        max_tokens: int = 2000,
    ) -> str:
        client = self._get_client()

        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        self._logger.debug("openai_request", model=self.model)
        response = await client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return response.choices[0].message.content or ""


class AnthropicProvider(LLMProvider):
    """Anthropic Claude LLM provider."""

    name = "anthropic"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or settings.anthropic_api_key
        self.model = model or settings.anthropic_model
        self._client = None
        self._logger = logger.bind(provider="anthropic")

    def _get_client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            if not self.api_key:
                raise LLMServiceError("Anthropic API key is not provided")
            import anthropic
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key)
        return self._client

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.8,
        max_tokens: int = 2000,
    ) -> str:
        client = self._get_client()

        self._logger.debug("anthropic_request", model=self.model)
        message = await client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system_prompt or "You are a helpful assistant.",
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
        )
        # Extract text content
        text_content = ""
        for content_block in message.content:
            if content_block.type == "text":
                text_content += content_block.text
        return text_content


class MockLLMProvider(LLMProvider):
    """
    Offline provider that answers each pipeline prompt with a plausible,
    well-formed response. Used when no API key is configured and in tests.
    """

    name = "mock"

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._logger = logger.bind(provider="mock")
        self.call_count = 0
        self.prompts = []

        self._tensions = [
            "We are more connected than ever, but feel lonelier than ever.",
            "Everyone is told to be authentic, but only the curated version gets rewarded.",
            "A generation raised on choice now feels paralysed by it.",
        ]
        self._insights = [
            "They perform confidence online while privately doubting every decision.",
            "They trust friends' screenshots more than any brand promise.",
            "They want to belong without having to buy their way in.",
            "They are tired of being marketed to as a demographic instead of people.",
        ]
        self._verdicts = [
            "Sharp tension, but the execution needs one more act of nerve.",
            "A rare idea that would make rival creatives jealous.",
            "Smart on paper, safe in the street.",
        ]

    async def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.8,
        max_tokens: int = 2000,
    ) -> str:
        self.call_count += 1
        self.prompts.append(prompt)
        self._logger.info("mock_completion", call_number=self.call_count, prompt_preview=prompt[:100])

        if '"insightSharpness"' in prompt:
            return self._evaluation_response()
        if '"_cdModifications"' in prompt:
            return self._director_response(prompt)
        if "creative twist" in prompt:
            return json.dumps({
                "viralHook": "Customers vote which of our products we should stop selling",
                "callToAction": "Tell us what to take off the shelf",
            })
        if '"campaignName"' in prompt:
            return self._campaign_response(prompt)
        if '"insights"' in prompt:
            return self._insights_response()
        if '"narrative"' in prompt:
            return json.dumps({"narrative": "I remember the night the lights went out on our street, and how strangers lit the way home."})
        if "JSON array" in prompt:
            return json.dumps([
                "Make the audience's private contradiction the public centrepiece",
                "Let the brand lose something visible to prove the point",
                "Turn the product ritual into a protest people can join",
            ])
        return self._story_response()

    def _insights_response(self) -> str:
        payload = {
            "tension": self._rng.choice(self._tensions),
            "insights": self._rng.sample(self._insights, 3),
        }
        return f"Here is the tension map:\n```json\n{json.dumps(payload, indent=2)}\n```"

    def _campaign_response(self, prompt: str) -> str:
        brand = "The brand"
        for line in prompt.splitlines():
            if line.strip().startswith("- Brand:"):
                brand = line.split(":", 1)[1].strip()
                break

        payload = {
            "campaignName": f"{brand}: The Honest Receipt",
            "keyMessage": "Stop pretending the small print is small.",
            "creativeStrategy": [
                "Expose the gap between what people buy and what they keep",
                "Make the audience co-author the brand's confession",
                "Use retail rituals as the media channel",
            ],
            "executionPlan": [
                "1. Pop-up store where prices are paid in honesty",
                "2. Receipts printed with the real cost of impulse buys",
                "3. Live stream of the brand's own returns warehouse",
            ],
            "viralHook": "The receipt nobody wants to throw away",
            "consumerInteraction": "Upload a receipt and get an honest review of it",
            "expectedOutcomes": ["Earned media", "Store visits", "Brand trust"],
            "viralElement": "A CEO reading customer complaints on a bus stop screen",
            "prHeadline": f"{brand} Admits What Every Brand Hides",
            "callToAction": "Bring us your worst purchase",
            "creativeInsights": ["They want to belong without having to buy their way in."],
            "emotionalAppeal": ["Honesty", "Relief"],
            "targetAudience": ["Shoppers who regret impulse buys"],
        }
        return json.dumps(payload, indent=2)

    def _director_response(self, prompt: str) -> str:
        campaign = parse_json_response(prompt)
        if not isinstance(campaign, dict):
            campaign = {}
        steps = list(campaign.get("executionPlan") or [])
        steps.append(f"{len(steps) + 1}. Print the brand's own complaints on every receipt")
        campaign["executionPlan"] = steps
        campaign["_cdModifications"] = ["Added a self-incriminating receipt step"]
        return json.dumps(campaign, indent=2)

    def _evaluation_response(self) -> str:
        payload = {
            "insightSharpness": self._rng.randint(5, 9),
            "ideaOriginality": self._rng.randint(5, 9),
            "executionPotential": self._rng.randint(5, 9),
            "awardPotential": self._rng.randint(4, 8),
            "finalVerdict": self._rng.choice(self._verdicts),
        }
        return f"```json\n{json.dumps(payload)}\n```"

    def _story_response(self) -> str:
        return (
            "Every Sunday night she laid out her clothes for a week she dreaded. "
            "The wardrobe was full; nothing in it felt like her. "
            "Then one morning she wore the thing she had been saving, and the day did not end."
        )


class LLMService:
    """
    Central LLM service for the pipeline.
    Wraps a provider with timeout handling and error normalisation.
    """

    def __init__(self, provider: Optional[LLMProvider] = None, timeout: Optional[float] = None):
        if provider:
            self._provider = provider
        else:
            # Select provider based on configuration
            llm_provider = settings.llm_provider

            if llm_provider == "mock":
                self._provider = MockLLMProvider()
                logger.info("Using Mock LLM provider (configured)")
            elif llm_provider == "anthropic" and settings.anthropic_api_key:
                self._provider = AnthropicProvider()
                logger.info("Using Anthropic Claude as LLM provider")
            elif llm_provider == "openai" and settings.openai_api_key:
                self._provider = OpenAIProvider()
                logger.info("Using OpenAI as LLM provider")
            elif settings.openai_api_key:
                self._provider = OpenAIProvider()
                logger.info("Using OpenAI as LLM provider (auto-detected)")
            elif settings.anthropic_api_key:
                self._provider = AnthropicProvider()
                logger.info("Using Anthropic Claude as LLM provider (auto-detected)")
            else:
                self._provider = MockLLMProvider()
                logger.info("Using Mock LLM provider (no API keys configured)")

        self.timeout = timeout if timeout is not None else settings.llm_timeout_seconds
        self._logger = logger.bind(component="llm_service", provider=self._provider.name)

    @property
    def provider(self) -> LLMProvider:
        return self._provider

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """Send one prompt and return the raw text response."""
        try:
            return await asyncio.wait_for(
                self._provider.complete(
                    prompt=prompt,
                    system_prompt=system_prompt,
                    temperature=settings.llm_temperature if temperature is None else temperature,
                    max_tokens=max_tokens or settings.llm_max_tokens,
                ),
                timeout=timeout or self.timeout,
            )
        except asyncio.TimeoutError as e:
            self._logger.error("llm_completion_timed_out", timeout=timeout or self.timeout)
            raise LLMServiceError(f"{self._provider.name} completion timed out") from e
        except LLMServiceError:
            raise
        except Exception as e:
            self._logger.error("llm_completion_failed", error=str(e))
            raise LLMServiceError(f"{self._provider.name} completion failed: {e}") from e


# Global LLM service instance
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """Get or create the global LLM service instance."""
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
