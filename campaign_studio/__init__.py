"""
Campaign Studio: reference-campaign matching, bravery scoring and
LLM-driven campaign generation.
"""

__version__ = "0.1.0"
