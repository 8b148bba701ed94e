"""
PitchDeck Scout - Version and metadata
"""

__version__ = "0.3.0"
__author__ = "PitchDeck Scout Contributors"
__license__ = "MIT"
__description__ = (
    "Detects pitch deck attachments in incoming mail and saves them"
)
