"""
LLM client that relays analysis prompts to Gemini.

The client does not interpret the model's answer: it returns the upstream
body, status and content type so the dashboard sees exactly what Gemini
sent, including Gemini's own error payloads.
"""

import logging
from typing import Any, Dict

import requests

from models.data_models import AnalysisResult

logger = logging.getLogger(__name__)


def build_generation_request(prompt: str, temperature: float = 0.0) -> Dict[str, Any]:
    """Build the generateContent body for a single-turn prompt.

    Same prompt in, same body out.
    """
    return {
        "contents": [
            {
                "parts": [
                    {"text": prompt}
                ]
            }
        ],
        "generationConfig": {"temperature": temperature},
    }


class GeminiProxyClient:
    """
    Client for forwarding prompts to a Gemini generateContent endpoint.

    Temperature is pinned to 0.0. Each prompt is sent exactly once.
    """

    def __init__(self, api_url: str, api_key: str, timeout: float = 30.0):
        """
        Initialize Gemini proxy client.

        Args:
            api_url: Full generateContent URL (model included)
            api_key: Gemini API key, sent in the x-goog-api-key header
            timeout: Seconds to wait for the upstream response

        Raises:
            ValueError: If the URL or API key is missing
        """
        if not api_url:
            raise ValueError("Gemini API URL is required but not provided")
        if not api_key:
            raise ValueError("Gemini API key is required but not provided")

        self.api_url = api_url
        self.api_key = api_key
        self.timeout = timeout
        self.temperature = 0.0

    def forward(self, prompt: str) -> AnalysisResult:
        """
        Send one prompt upstream and capture the raw response.

        Args:
            prompt: The prompt text to send

        Returns:
            AnalysisResult with the upstream body, status code and content type

        Raises:
            requests.RequestException: On network errors or timeout
        """
        logger.debug(f"Forwarding prompt to Gemini ({len(prompt)} chars)")

        response = requests.post(
            self.api_url,
            headers={
                "Content-Type": "application/json",
                "x-goog-api-key": self.api_key,
            },
            json=build_generation_request(prompt, self.temperature),
            timeout=self.timeout,
        )

        result = AnalysisResult(
            body=response.text,
            status_code=response.status_code,
            content_type=response.headers.get("content-type", ""),
        )

        if response.ok:
            logger.info(f"Gemini responded {result.status_code} ({len(result.body)} chars)")
        else:
            logger.warning(f"Gemini responded {result.status_code}; relaying upstream error body")

        return result
