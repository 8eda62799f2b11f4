"""Interview module -- question catalog, requirement derivation and the state machine.

Provides the static 15-question catalog, the pure per-question derivation
rules that build a RequirementsProfile from the response ledger, and
InterviewStateMachine, which owns one Session and its stage/question pointer.
"""
