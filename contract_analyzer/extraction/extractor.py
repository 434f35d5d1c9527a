"""AI-powered tender/contract extractor."""

from typing import Any

from contract_analyzer.extraction.base import BaseExtractor
from contract_analyzer.extraction.client_base import BaseExtractionClient
from contract_analyzer.extraction.json_parser import extract_json
from contract_analyzer.extraction.models import ContractFields, Submittal
from contract_analyzer.extraction.prompt_builder import PromptBuilder
from contract_analyzer.extraction.rate_limiter import CallSpacer
from contract_analyzer.extraction.validator import build_fields, build_submittals
from contract_analyzer.logging.logger import Log
from contract_analyzer.text.chunker import TextChunker


class Extractor(BaseExtractor):
    """Extracts contract fields and submittals from text using an AI provider.

    Documents longer than the chunker's max_chars are sent chunk by chunk:
    fields are merged first-non-null-wins in chunk order, submittals are
    concatenated and de-duplicated on (item, page).
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        fields_max_output_tokens: int = 2048,
        submittals_max_output_tokens: int = 1024,
        prompt_builder: PromptBuilder | None = None,
        chunker: TextChunker | None = None,
        spacer: CallSpacer | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._fields_max_output_tokens = fields_max_output_tokens
        self._submittals_max_output_tokens = submittals_max_output_tokens
        self._prompts = prompt_builder or PromptBuilder()
        self._chunker = chunker
        self._spacer = spacer or CallSpacer(0.0)
        self._system_prompt = system_prompt

    @property
    def model(self) -> str:
        return self._model

    def extract_fields(self, document_name: str, text: str) -> ContractFields:
        chunks = self._split(text)
        merged: ContractFields = {}
        for index, chunk in enumerate(chunks):
            name = PromptBuilder.part_name(document_name, index, len(chunks))
            prompt = self._prompts.build_fields_prompt(name, chunk)
            fields = build_fields(
                self._request(prompt, self._fields_max_output_tokens),
                self._prompts.field_list,
            )
            for key, value in fields.items():
                if merged.get(key) is None:
                    merged[key] = value

        found = sum(1 for key in self._prompts.field_list if merged.get(key) is not None)
        Log.info(
            f"Field extraction complete: {found}/{len(self._prompts.field_list)} fields "
            f"found in {len(chunks)} chunk(s)"
        )
        return merged

    def extract_submittals(self, document_name: str, text: str) -> list[Submittal]:
        chunks = self._split(text)
        submittals: list[Submittal] = []
        for index, chunk in enumerate(chunks):
            name = PromptBuilder.part_name(document_name, index, len(chunks))
            prompt = self._prompts.build_submittals_prompt(name, chunk)
            submittals.extend(
                build_submittals(self._request(prompt, self._submittals_max_output_tokens))
            )
        if len(chunks) > 1:
            submittals = _dedupe(submittals)

        Log.info(f"Submittal extraction complete: {len(submittals)} submittals")
        return submittals

    def _split(self, text: str) -> list[str]:
        if self._chunker is None:
            return [text]
        chunks = list(self._chunker.chunk(text))
        if len(chunks) > 1:
            Log.info(f"Document split into {len(chunks)} chunks of <= {self._chunker.max_chars} chars")
        return chunks

    def _request(self, prompt: str, max_output_tokens: int) -> Any:
        Log.debug(f"Extraction prompt:\n{prompt}")
        self._spacer.wait()
        raw_response = self._client.generate_content(
            model=self._model,
            prompt=prompt,
            temperature=self._temperature,
            max_output_tokens=max_output_tokens,
            system_prompt=self._system_prompt,
        )
        Log.debug(f"AI raw response:\n{raw_response}")
        return extract_json(raw_response)


def _dedupe(submittals: list[Submittal]) -> list[Submittal]:
    seen: set[tuple[str, int | None]] = set()
    unique: list[Submittal] = []
    for submittal in submittals:
        key = (submittal.item.strip().lower(), submittal.page)
        if key in seen:
            continue
        seen.add(key)
        unique.append(submittal)
    return unique
