"""
Gemini Prompt Proxy Backend

This package provides a FastAPI backend that forwards text prompts to the
Google Generative Language API and relays the generated text to a browser front end.
"""

__version__ = "0.1.0"
