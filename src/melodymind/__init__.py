"""
MelodyMind - Mood Inference Engine

Turns a facial image, free text, speech or song lyrics into a canonical mood
with a confidence and intensity, and ranks songs against that mood.
"""

__version__ = "0.1.0"
__author__ = "MelodyMind Team"
