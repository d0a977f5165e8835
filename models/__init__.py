"""
Models package for the circular text entry engine.

This package contains the prediction model, session metrics, keystroke log,
entry engine and trial sequencer.
"""
