import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from career_engine.ai.enricher import PathwayEnricher
from career_engine.cache import TTLCache
from career_engine.config import Settings, get_settings
from career_engine.logic.constants import ENGINE_VERSION
from career_engine.logic.engine import CareerMatchingEngine
from career_engine.logic.taxonomy import TaxonomyStore, load_default_taxonomy
from career_engine.routes import router as career_assessment_router


def create_app(
    settings: Optional[Settings] = None,
    taxonomy: Optional[TaxonomyStore] = None,
    enricher: Optional[PathwayEnricher] = None,
) -> FastAPI:
    """
    Build the API app. The catalog is loaded here, once; a malformed catalog
    raises CatalogError and the app does not start.
    """
    settings = settings or get_settings()

    logging.basicConfig(level=settings.log_level)
    logging.info("App starting with career catalog %s", settings.catalog_path or "(packaged)")

    if taxonomy is None:
        if settings.catalog_path:
            taxonomy = TaxonomyStore.from_file(settings.catalog_path)
        else:
            taxonomy = load_default_taxonomy()

    cache = TTLCache(
        ttl_seconds=settings.enrichment_cache_ttl_seconds,
        maxsize=settings.enrichment_cache_maxsize,
    )
    if enricher is None and settings.enrichment_active:
        enricher = PathwayEnricher.from_settings(settings, cache=cache)
    elif enricher is not None and enricher.cache is not None:
        cache = enricher.cache

    app = FastAPI(title="Career Guidance Matching API", version=ENGINE_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.engine = CareerMatchingEngine(taxonomy, top_n=settings.top_n, enricher=enricher)
    app.state.cache = cache
    app.include_router(career_assessment_router)
    return app


app = create_app()
