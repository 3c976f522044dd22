class SentimentCliError(RuntimeError):
    """Base error for hf-sentiment."""


class MissingTokenError(SentimentCliError):
    """The Hugging Face token is not configured; nothing may be sent."""
