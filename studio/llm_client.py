import json
import logging
from typing import Optional

from .config import Settings

logger = logging.getLogger(__name__)

WEB_SEARCH_TOOL = {"type": "web_search_20250305", "name": "web_search", "max_uses": 5}
STRUCTURED_OUTPUT_TOOL = "record_output"


def _get_client(api_key: str):
    from anthropic import Anthropic

    # A failed call fails once; no SDK-level retries
    return Anthropic(api_key=api_key, max_retries=0)


class GeneratorClient:
    """Handle to the external generator, built once and passed to each request builder."""

    def __init__(self, settings: Settings, sdk=None):
        self.settings = settings
        self._sdk = sdk

    @property
    def sdk(self):
        if self._sdk is None:
            self._sdk = _get_client(self.settings.api_key)
        return self._sdk

    def generate(
        self,
        prompt: str,
        *,
        web_search: bool = False,
        response_schema: Optional[dict] = None,
    ) -> str:
        """
        Send one prompt and return the response text.

        Args:
            prompt: user instruction
            web_search: ground the answer with the server-side web search tool
            response_schema: JSON schema the output must follow; returned as JSON text

        Returns:
            Response text, or "" when the generator returned no text.

        Raises:
            ValueError: both web_search and response_schema were requested
            anthropic.APIError: transport, auth or quota failure
        """
        if web_search and response_schema is not None:
            raise ValueError("web_search and response_schema cannot be combined in one call")

        kwargs = {
            "model": self.settings.model,
            "max_tokens": self.settings.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

        wrapped = False
        if web_search:
            kwargs["tools"] = [WEB_SEARCH_TOOL]
        elif response_schema is not None:
            input_schema = response_schema
            # Tool input must be an object, so arrays ride under "items"
            if response_schema.get("type") != "object":
                input_schema = {
                    "type": "object",
                    "properties": {"items": response_schema},
                    "required": ["items"],
                }
                wrapped = True
            kwargs["tools"] = [
                {
                    "name": STRUCTURED_OUTPUT_TOOL,
                    "description": "Record the final answer in the required structure.",
                    "input_schema": input_schema,
                }
            ]
            kwargs["tool_choice"] = {"type": "tool", "name": STRUCTURED_OUTPUT_TOOL}

        mode = "web_search" if web_search else "schema" if response_schema is not None else "text"
        logger.info("Calling generator model=%s mode=%s", self.settings.model, mode)

        response = self.sdk.messages.create(**kwargs)

        if response_schema is not None:
            for block in response.content:
                if block.type == "tool_use" and block.name == STRUCTURED_OUTPUT_TOOL:
                    data = block.input
                    if wrapped:
                        data = data.get("items", [])
                    return json.dumps(data, ensure_ascii=False)
            return ""

        return "".join(block.text for block in response.content if block.type == "text")
