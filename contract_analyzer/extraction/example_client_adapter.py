"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from contract_analyzer.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that returns fixed, valid extraction JSON.

    No network calls. Useful for local development, tests, and as a template
    for building real provider adapters. The response is chosen by looking
    at which prompt it receives.
    """

    FIELDS_RESPONSE: ClassVar[dict[str, object]] = {
        "ClientName": "Example Client",
        "NameOfWork": None,
    }
    SUBMITTALS_RESPONSE: ClassVar[dict[str, object]] = {
        "submittals": [
            {"item": "Bid Security", "page": None, "reason": "Example submittal"},
        ],
    }

    def __init__(self) -> None:
        self.calls: list[str] = []

    def generate_content(
        self,
        *,
        model: str,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
        system_prompt: str = "",
    ) -> str:
        _ = model, temperature, max_output_tokens, system_prompt
        self.calls.append(prompt)
        if '"submittals"' in prompt:
            return json.dumps(self.SUBMITTALS_RESPONSE)
        return "```json\n" + json.dumps(self.FIELDS_RESPONSE) + "\n```"
