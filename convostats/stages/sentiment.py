"""
Sentiment Scorer.

Produces one overall sentiment score for the joined message text.
Two interchangeable backends: VADER (local, default) and Gemini.
"""

import json
import logging
import math
from typing import Any, Optional

import google.generativeai as genai
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

logger = logging.getLogger(__name__)

FALLBACK_SCORE = 0.0


SYSTEM_PROMPT = """You are a sentiment analysis assistant.

Your task:
1. Read the whole text as a single document
2. Judge its overall emotional valence
3. Return one score between -1.0 (very negative) and 1.0 (very positive), 0.0 for neutral

Output valid JSON only, in the form {"score": <number>}."""


def _clamp(score: float) -> float:
    return max(-1.0, min(1.0, score))


def coerce_score(value: Any) -> float:
    """
    Turn an analyzer output into a score in [-1.0, 1.0].

    Anything that is not a finite number falls back to 0.0.
    """
    if isinstance(value, bool):
        return FALLBACK_SCORE
    try:
        score = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Sentiment output {value!r} is not numeric, using {FALLBACK_SCORE}")
        return FALLBACK_SCORE
    if not math.isfinite(score):
        logger.warning(f"Sentiment output {value!r} is not finite, using {FALLBACK_SCORE}")
        return FALLBACK_SCORE
    return _clamp(score)


class SentimentScorer:
    """
    Interface for whole-text sentiment scoring.

    Subclasses implement _score_text; score() handles empty input
    and normalizes the result.
    """

    name = "base"

    def score(self, text: str) -> float:
        """
        Score the whole text at once.

        Args:
            text: Joined message text

        Returns:
            Sentiment in [-1.0, 1.0], or 0.0 when no score is computable
        """
        if not text or not text.strip():
            logger.info("Empty text, sentiment defaults to 0.0")
            return FALLBACK_SCORE
        return coerce_score(self._score_text(text))

    def _score_text(self, text: str) -> Any:
        raise NotImplementedError


class VaderSentimentScorer(SentimentScorer):
    """VADER compound score over the full text."""

    name = "vader"

    def __init__(self):
        self.analyzer = SentimentIntensityAnalyzer()
        logger.info("Initialized VaderSentimentScorer")

    def _score_text(self, text: str) -> Any:
        scores = self.analyzer.polarity_scores(text)
        return scores.get("compound")


class GeminiSentimentScorer(SentimentScorer):
    """
    Asks a Gemini model for the overall sentiment of the text.

    Retries on malformed JSON or API errors; after the last attempt the
    score falls back to 0.0.
    """

    name = "gemini"

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-1.5-flash",
        temperature: float = 0.0,
        max_retries: int = 3,
        max_chars: int = 200_000
    ):
        """
        Initialize Gemini scorer.

        Args:
            api_key: Gemini API key
            model_name: Gemini model to use
            temperature: LLM temperature (0.0 for deterministic)
            max_retries: Number of attempts before falling back
            max_chars: Text beyond this length is not sent
        """
        self.model_name = model_name
        self.max_retries = max_retries
        self.max_chars = max_chars

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=model_name,
            generation_config={
                "temperature": temperature,
                "response_mime_type": "application/json"
            },
            system_instruction=SYSTEM_PROMPT
        )

        logger.info(f"Initialized GeminiSentimentScorer with model={model_name}, temp={temperature}")

    def _score_text(self, text: str) -> Any:
        if len(text) > self.max_chars:
            logger.warning(f"Text truncated from {len(text)} to {self.max_chars} characters for scoring")
            text = text[:self.max_chars]

        for attempt in range(self.max_retries):
            try:
                response = self.model.generate_content(text)
                return self._parse_response(response.text)

            except json.JSONDecodeError as e:
                logger.error(f"Failed to parse sentiment JSON response (attempt {attempt + 1}): {e}")

            except Exception as e:
                logger.error(f"Gemini API error (attempt {attempt + 1}): {e}")

        logger.warning(f"Max retries reached, sentiment defaults to {FALLBACK_SCORE}")
        return FALLBACK_SCORE

    def _parse_response(self, response_text: str) -> Any:
        """
        Pull the score out of the model's JSON response.

        Raises:
            json.JSONDecodeError: If response is not valid JSON
        """
        data = json.loads(response_text)
        if not isinstance(data, dict) or "score" not in data:
            logger.warning("Sentiment response missing 'score' field")
            return None
        return data["score"]


def create_scorer(backend: str = "vader", api_key: Optional[str] = None, **kwargs) -> SentimentScorer:
    """
    Build the scorer for a backend name.

    Raises:
        ValueError: Unknown backend, or gemini without an API key
    """
    backend = backend.lower()
    if backend == "vader":
        return VaderSentimentScorer()
    if backend == "gemini":
        if not api_key:
            raise ValueError("GOOGLE_API_KEY is required for the gemini sentiment backend")
        return GeminiSentimentScorer(api_key=api_key, **kwargs)
    raise ValueError(f"Unknown sentiment backend: {backend}. Must be 'vader' or 'gemini'")
