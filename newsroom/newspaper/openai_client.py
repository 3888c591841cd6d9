"""
OpenAI Client Module

Minimal client for the OpenAI chat completions API, used for delegated
article copy. No retry logic: a non-success response raises and the
caller decides what to do.
"""

import time
from typing import Dict, List, Optional

import requests
from loguru import logger


class OpenAIClient:
    """Client for the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = 'https://api.openai.com/v1',
        default_model: str = 'gpt-4o-mini',
        timeout: int = 60,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize OpenAI client.

        Args:
            api_key: OpenAI API key (sent as a bearer token)
            base_url: API root (default: https://api.openai.com/v1)
            default_model: Model used when none is given (default: gpt-4o-mini)
            timeout: Request timeout in seconds (default: 60)
            session: Optional requests session
        """
        if not api_key:
            raise ValueError("OpenAI API key is required")

        self.base_url = base_url.rstrip('/')
        self.default_model = default_model
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f"Bearer {api_key}",
            'Content-Type': 'application/json',
        })

        logger.info(f"Initialized OpenAIClient: {self.base_url}, default model: {self.default_model}")

    def chat_completion(self, messages: List[Dict[str, str]], model: Optional[str] = None) -> str:
        """
        Run a chat completion and return the first choice's text.

        Args:
            messages: Conversation as a list of {role, content} dicts
            model: Model name (uses default if not specified)

        Returns:
            Generated text (empty string if the response carried none)

        Raises:
            requests.exceptions.RequestException: On network errors or non-2xx responses
            ValueError: On invalid response format
        """
        model = model or self.default_model
        endpoint = f"{self.base_url}/chat/completions"
        payload = {
            'model': model,
            'messages': messages,
        }

        logger.info(f"Requesting completion with model: {model}")
        start_time = time.time()

        try:
            response = self.session.post(endpoint, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Completion request failed: {e}")
            raise

        try:
            choices = data.get('choices') or [{}]
            message = choices[0].get('message') or {}
            text = message.get('content') or ''
        except (AttributeError, TypeError) as e:
            logger.error(f"Invalid response format: {e}")
            raise ValueError(f"Could not parse OpenAI response: {e}")

        elapsed = time.time() - start_time
        logger.info(f"Completion finished in {elapsed:.2f}s, {len(text)} characters")
        return text

    def health_check(self) -> bool:
        """
        Check the API key is accepted.

        Returns:
            True if the models endpoint answered, False otherwise
        """
        try:
            response = self.session.get(f"{self.base_url}/models", timeout=10)
            response.raise_for_status()
            logger.info("OpenAI health check: OK")
            return True
        except requests.exceptions.RequestException as e:
            logger.error(f"OpenAI health check failed: {e}")
            return False
