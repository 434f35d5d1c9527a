from collections.abc import Sequence
from pathlib import Path

from contract_analyzer.extraction.models import FIELD_LIST
from contract_analyzer.extraction.prompt_loader import (
    FIELDS_PROMPT_FILE,
    SUBMITTALS_PROMPT_FILE,
    load_prompt_template,
)


class PromptBuilder:
    """Renders the fields and submittals prompts for a document or chunk."""

    def __init__(
        self,
        field_list: Sequence[str] = FIELD_LIST,
        fields_template_path: Path | None = None,
        submittals_template_path: Path | None = None,
    ) -> None:
        self._field_list = tuple(field_list)
        self._fields_template = load_prompt_template(FIELDS_PROMPT_FILE, fields_template_path)
        self._submittals_template = load_prompt_template(
            SUBMITTALS_PROMPT_FILE, submittals_template_path
        )
        self._field_interface = "\n".join(
            f"  {name}: string | null;" for name in self._field_list
        )

    @property
    def field_list(self) -> tuple[str, ...]:
        return self._field_list

    def build_fields_prompt(self, document_name: str, text: str) -> str:
        return self._fields_template.format(
            field_interface=self._field_interface,
            document_name=document_name,
            document_text=text,
        )

    def build_submittals_prompt(self, document_name: str, text: str) -> str:
        return self._submittals_template.format(
            document_name=document_name,
            document_text=text,
        )

    @staticmethod
    def part_name(document_name: str, index: int, total: int) -> str:
        """Label a chunk of a split document, e.g. 'tender.pdf (part 2 of 3)'."""
        if total <= 1:
            return document_name
        return f"{document_name} (part {index + 1} of {total})"
