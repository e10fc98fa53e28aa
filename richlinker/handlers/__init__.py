"""Site handlers: one extractor per supported site family."""

from richlinker.handlers.airtable import AirtableHandler
from richlinker.handlers.base import DebugCallback, SiteHandler
from richlinker.handlers.confluence import ConfluenceHandler
from richlinker.handlers.github import GitHubHandler
from richlinker.handlers.google_docs import GoogleDocsHandler
from richlinker.handlers.pipeline import PipelineDashboardHandler
from richlinker.handlers.registry import HandlerRegistry, create_default_registry

__all__ = [
    "AirtableHandler",
    "ConfluenceHandler",
    "DebugCallback",
    "GitHubHandler",
    "GoogleDocsHandler",
    "HandlerRegistry",
    "PipelineDashboardHandler",
    "SiteHandler",
    "create_default_registry",
]
