"""
Text analysis used to shape synthesized speech
"""
from .sentiment import SentimentAnalyzer
from .voice_advisor import VoiceParameterAdvisor, PersonalityModifier, DEFAULT_MODIFIERS

__all__ = [
    "SentimentAnalyzer",
    "VoiceParameterAdvisor",
    "PersonalityModifier",
    "DEFAULT_MODIFIERS",
]
