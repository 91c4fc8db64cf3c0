import logging
from dataclasses import dataclass
from typing import Optional

from metrics_align.core.settings import Settings, load_settings
from metrics_align.glossary.catalog_service import CatalogService
from metrics_align.glossary.glossary_parser import load_metric_catalog
from metrics_align.misalignment.misalignment_parser import load_misalignments
from metrics_align.misalignment.misalignment_service import MisalignmentService
from metrics_align.misalignment.scan_job import ScannerSession, StubDetectionJob
from metrics_align.relationships.relationship_parser import load_relationship_graph
from metrics_align.relationships.relationship_service import RelationshipGraphService
from metrics_align.translation.static_translation_provider import StaticTranslationProvider
from metrics_align.translation.translation_parser import load_translations
from metrics_align.translation.translation_service import TranslationService
from metrics_align.translation.translator_session import TranslatorSession

logger = logging.getLogger(__name__)

METRICS_FILE = "metrics_glossary.toml"
TRANSLATIONS_FILE = "translations.toml"
MISALIGNMENTS_FILE = "misalignments.toml"
RELATIONSHIPS_FILE = "relationship_graph.toml"


@dataclass
class Dashboard:
    """The four panels' services, loaded from one config directory."""
    settings: Settings
    catalog: CatalogService
    translator: TranslationService
    misalignments: MisalignmentService
    relationships: RelationshipGraphService

    def new_translator_session(self) -> TranslatorSession:
        return TranslatorSession(self.translator, delay_seconds=self.settings.translate_delay_seconds)

    def new_scanner_session(self) -> ScannerSession:
        return ScannerSession(StubDetectionJob(delay_seconds=self.settings.scan_delay_seconds))


def load_dashboard(settings: Optional[Settings] = None) -> Dashboard:
    """Load and validate every definition file under settings.config_dir."""
    settings = settings or load_settings()
    logger.info("Loading definitions from %s", settings.config_dir)

    catalog = CatalogService()
    catalog.load_metric_catalog(load_metric_catalog(settings.definition_path(METRICS_FILE)))
    catalog.validate_metric_catalog()

    translator = TranslationService(
        StaticTranslationProvider(load_translations(settings.definition_path(TRANSLATIONS_FILE)))
    )

    misalignments = MisalignmentService()
    misalignments.load_registry(load_misalignments(settings.definition_path(MISALIGNMENTS_FILE)))
    misalignments.validate_registry()

    relationships = RelationshipGraphService()
    relationships.load_relationship_graph(load_relationship_graph(settings.definition_path(RELATIONSHIPS_FILE)))
    relationships.validate_relationship_graph()

    return Dashboard(
        settings=settings,
        catalog=catalog,
        translator=translator,
        misalignments=misalignments,
        relationships=relationships,
    )
