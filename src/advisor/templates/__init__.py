"""Template module -- the static catalog of agent archetypes.

Provides AgentTemplate and its document section models, the shared section
skeletons, and the five built-in archetypes with id/capability lookups.
"""
