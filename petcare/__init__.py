"""Pet-care Telegram Mini App backend."""

__version__ = "1.0.0"
