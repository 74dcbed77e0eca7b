"""
Career guidance matching engine: questionnaire normalization, deterministic
career scoring, rule-based pathways and an optional FastAPI surface.
"""

from .logic.constants import ENGINE_VERSION

__version__ = ENGINE_VERSION
