"""
Prompt templates for the vision model.
"""

from .viral import VIRAL_ANALYSIS_PROMPT

__all__ = ["VIRAL_ANALYSIS_PROMPT"]
