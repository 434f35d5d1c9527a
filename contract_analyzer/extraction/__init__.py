from contract_analyzer.extraction.base import BaseExtractor
from contract_analyzer.extraction.extractor import Extractor
from contract_analyzer.extraction.factory import ExtractorFactory

__all__ = ["BaseExtractor", "Extractor", "ExtractorFactory"]
