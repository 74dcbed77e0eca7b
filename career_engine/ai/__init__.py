from .enricher import PathwayEnricher, EnrichedSteps

__all__ = ["PathwayEnricher", "EnrichedSteps"]
