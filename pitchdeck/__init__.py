"""
PitchDeck Scout.

Inspects incoming mail, decides with a two-tier LLM chain whether a
message carries a pitch deck and saves the attachments when it does.
"""

from .__version__ import __version__

__all__ = ["__version__"]
