"""
Hint Service

Optional language-model collaborator that produces hints and word details.
Every failure is replaced by a fixed fallback so the game keeps going.
"""

import json
from typing import Dict, List, Optional

import requests

from ..models.game import WordInfo
from ..config.game_settings import (
    PRESET_HINTS, FALLBACK_HINT, FALLBACK_DEFINITION, FALLBACK_EXAMPLE
)
from ..utils.game_logger import game_logger

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

WORD_INFO_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "word": {"type": "STRING"},
        "definition": {"type": "STRING"},
        "example": {"type": "STRING"},
        "etymology": {"type": "STRING"}
    },
    "required": ["word", "definition", "example"]
}


class HintServiceError(Exception):
    """Raised internally when the language model returns nothing usable."""


class HintService:
    """
    Thin client for the Gemini ``generateContent`` REST endpoint.

    Without an API key the service never touches the network and always
    answers with the preset or fallback values.
    """

    def __init__(self, api_key: Optional[str] = None,
                 model: str = "gemini-3-flash-preview", timeout: float = 10.0):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def initial_hint(self, target_word: str) -> Optional[str]:
        """Hint shown before the player asks for one, if the word has a preset."""
        return PRESET_HINTS.get(target_word.upper())

    def get_hint(self, target_word: str, guesses: List[str]) -> str:
        """
        Produces a one-sentence cryptic hint for the target word.

        Args:
            target_word: The answer
            guesses: Guesses made so far, as plain strings

        Returns:
            str: The hint, or a fixed fallback on any failure
        """
        preset = self.initial_hint(target_word)
        if preset:
            return preset

        if not self.enabled:
            return FALLBACK_HINT

        guessed = ", ".join(guesses) if guesses else "nothing yet"
        prompt = (
            f'The target word is "{target_word}". The user has guessed: {guessed}. '
            "Provide a cryptic, one-sentence hint without revealing the word."
        )

        try:
            text = self._generate(prompt)
            hint = text.strip()
            if not hint:
                raise HintServiceError("Empty hint returned")
            return hint
        except (requests.RequestException, HintServiceError, ValueError) as e:
            game_logger.logger.warning(f"Hint request failed, using fallback: {e}")
            return FALLBACK_HINT

    def get_word_details(self, word: str) -> WordInfo:
        """
        Looks up a definition, example sentence and etymology for ``word``.

        Returns:
            WordInfo: Parsed details, or a fixed fallback on any failure
        """
        fallback = WordInfo(word=word, definition=FALLBACK_DEFINITION, example=FALLBACK_EXAMPLE)

        if not self.enabled:
            return fallback

        try:
            text = self._generate(
                f'Provide details for the word "{word}".',
                generation_config={
                    "responseMimeType": "application/json",
                    "responseSchema": WORD_INFO_SCHEMA
                }
            )
            data = json.loads(text)
            if not isinstance(data, dict):
                raise HintServiceError("Word details must be a JSON object")
            return WordInfo(
                word=str(data.get('word') or word),
                definition=str(data['definition']),
                example=str(data['example']),
                etymology=data.get('etymology')
            )
        except (requests.RequestException, HintServiceError, ValueError, KeyError) as e:
            game_logger.logger.warning(f"Word details request failed for '{word}', using fallback: {e}")
            return fallback

    def _generate(self, prompt: str, generation_config: Optional[Dict] = None) -> str:
        """Sends one prompt and returns the text of the first candidate."""
        payload: Dict = {"contents": [{"parts": [{"text": prompt}]}]}
        if generation_config:
            payload["generationConfig"] = generation_config

        response = requests.post(
            GEMINI_API_URL.format(model=self.model),
            json=payload,
            headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
            timeout=self.timeout
        )
        response.raise_for_status()
        body = response.json()

        try:
            parts = body["candidates"][0]["content"]["parts"]
            return "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
        except (KeyError, IndexError, TypeError):
            raise HintServiceError("Malformed response from language model")


# Global service instance
_hint_service = None


def get_hint_service() -> Optional[HintService]:
    """Get the global hint service instance."""
    return _hint_service


def initialize_hint_service(api_key: Optional[str] = None, model: str = "gemini-3-flash-preview",
                            timeout: float = 10.0) -> HintService:
    """Initialize the global hint service instance."""
    global _hint_service
    _hint_service = HintService(api_key, model, timeout)
    return _hint_service
