"""Image generation engines."""
from .google_imagen import GoogleImagenEngine
from .local_fallback import LocalPlaceholderRenderer
from .openai_dalle import OpenAIDalleEngine

__all__ = ["GoogleImagenEngine", "LocalPlaceholderRenderer", "OpenAIDalleEngine"]
