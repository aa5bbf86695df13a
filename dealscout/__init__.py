"""
dealscout — conversational real-estate deal finder.

Turns a natural-language request into a ranked list of listings whose
estimated flip profit clears a threshold.
"""

__version__ = "0.1.0"
