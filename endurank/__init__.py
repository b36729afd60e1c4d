"""
Endurank - personalized ranking, duplicate detection and natural-language
search for endurance-sports gear and races.
"""

__version__ = "0.1.0"
