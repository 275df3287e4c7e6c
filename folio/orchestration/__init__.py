"""Orchestration module for article rendering and translation fallback."""

from folio.orchestration.article_orchestrator import (
    ArticleOrchestrator,
    RenderedArticle,
    WarmResult,
)
from folio.orchestration.strategies import (
    RenderContext,
    RenderedContent,
    RenderStrategy,
    StrategyResult,
    StrategyStatus,
)
from folio.orchestration.view_resolution import (
    BannerKind,
    ViewMode,
    ViewState,
    parse_view_mode,
    resolve_view,
)

__all__ = [
    "ArticleOrchestrator",
    "BannerKind",
    "RenderContext",
    "RenderedArticle",
    "RenderedContent",
    "RenderStrategy",
    "StrategyResult",
    "StrategyStatus",
    "ViewMode",
    "ViewState",
    "WarmResult",
    "parse_view_mode",
    "resolve_view",
]
