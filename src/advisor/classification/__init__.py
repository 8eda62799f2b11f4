"""Classification module -- deterministic archetype scoring.

Provides AgentClassifier (full-mode ranking of every template against a
complete profile) and partial_archetype (provisional live preview for an
in-progress interview).
"""
