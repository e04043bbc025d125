"""
HTTP client for an OpenAI-compatible language model API.

Used for structured JSON generation and text-to-speech. Every failure
(network, timeout, HTTP status, bad body) surfaces as ExternalServiceError.
"""
import json
import logging

import requests
from django.conf import settings

from smarthome_panel.errors import ExternalServiceError

logger = logging.getLogger('assistant')


class LLMClient:
    """Thin wrapper over `/chat/completions` and `/audio/speech`."""

    def __init__(self, api_base=None, api_key=None, model=None, tts_model=None,
                 tts_voice=None, timeout=None):
        config = settings.ASSISTANT
        self.api_base = (api_base or config['API_BASE']).rstrip('/')
        self.api_key = api_key if api_key is not None else config['API_KEY']
        self.model = model or config['MODEL']
        self.tts_model = tts_model or config['TTS_MODEL']
        self.tts_voice = tts_voice or config['TTS_VOICE']
        self.timeout = timeout or config['TIMEOUT_SECONDS']

    def generate_json(self, system_prompt, user_prompt):
        """Ask the model for a JSON object and return it as a dict."""
        response = self._post('/chat/completions', {
            "model": self.model,
            "response_format": {"type": "json_object"},
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        })

        try:
            content = response.json()['choices'][0]['message']['content']
            result = json.loads(content)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"🤖 Unreadable model reply: {e}")
            raise ExternalServiceError("The assistant returned an unreadable reply.")

        if not isinstance(result, dict):
            raise ExternalServiceError("The assistant returned an unexpected reply.")
        return result

    def synthesize_speech(self, text):
        """Return raw 24 kHz mono 16-bit PCM for `text`."""
        response = self._post('/audio/speech', {
            "model": self.tts_model,
            "voice": self.tts_voice,
            "input": text,
            "response_format": "pcm",
        })
        if not response.content:
            raise ExternalServiceError("No audio returned from the speech service.")
        return response.content

    def _post(self, path, payload):
        if not self.api_key:
            raise ExternalServiceError("The assistant is not configured.")

        url = f"{self.api_base}{path}"
        try:
            response = requests.post(
                url,
                json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.error(f"🤖 {path} timed out after {self.timeout}s")
            raise ExternalServiceError("The assistant took too long to respond.")
        except requests.RequestException as e:
            logger.error(f"🤖 {path} failed: {e}")
            raise ExternalServiceError("The assistant is unreachable.")

        if response.status_code >= 400:
            logger.error(f"🤖 {path} answered {response.status_code}: {response.text[:200]}")
            raise ExternalServiceError(f"The assistant answered with an error ({response.status_code}).")

        return response
