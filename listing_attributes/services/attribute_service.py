"""Attribute service: resolves and presents the attributes of a listing."""

import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from listing_attributes.config import settings
from listing_attributes.schemas.display import AttributePanel, LayoutVariant
from listing_attributes.services.presenter import AttributePresenter
from listing_attributes.services.resolver import (
    AttributeResolver,
    DatabaseAttributeSource,
    DefinitionSource,
    ValueSource,
)

logger = logging.getLogger(__name__)


class AttributeService:
    """Stateless facade used by the listing detail view.

    Each call builds its result from scratch; nothing is cached between
    requests.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] | None = None,
        definition_source: DefinitionSource | None = None,
        value_source: ValueSource | None = None,
        presenter: AttributePresenter | None = None,
    ):
        """Initialize with a session factory or explicit sources.

        Explicit sources take precedence over the database.
        """
        if definition_source is None or value_source is None:
            if session_factory is None:
                raise ValueError("A session factory or both sources are required")
            database_source = DatabaseAttributeSource(session_factory)
            definition_source = definition_source or database_source
            value_source = value_source or database_source

        self.resolver = AttributeResolver(
            definition_source,
            value_source,
            timeout=settings.store_timeout_seconds,
            degrade=settings.degrade_mode,
        )
        self.presenter = presenter or AttributePresenter()

    async def display(
        self,
        category_id: str,
        listing_id: str,
        variant: "LayoutVariant | str | None" = None,
    ) -> AttributePanel:
        """Resolve a listing's attributes and arrange them for display."""
        report = await self.resolver.resolve_report(category_id, listing_id)
        if report.failed_sources:
            logger.warning(
                f"Attributes for listing '{listing_id}' resolved without: "
                f"{', '.join(report.failed_sources)}"
            )
        return self.presenter.present(report.attributes, variant)
