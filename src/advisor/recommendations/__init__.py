"""Recommendation module -- the implementation blueprint for the winning archetype.

Provides the AgentRecommendation model and RecommendationAssembler.
"""
