class ExternalServiceUnavailable(Exception):
    """Raised when the text generation service cannot produce a response.

    Never surfaced to API callers: the coaching composer catches it and
    renders its templated fallback instead.
    """
