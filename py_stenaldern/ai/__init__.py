"""
Clients for the vision and image-generation models.
"""

from .openrouter import OpenRouterClient, ViewAnalysis, GeneratedImage

__all__ = ['OpenRouterClient', 'ViewAnalysis', 'GeneratedImage']
