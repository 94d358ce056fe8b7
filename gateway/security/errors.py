class SigningError(Exception):
    """Base class for request signing and callback verification failures."""


class MissingCredentialError(SigningError):
    """Raised at startup when provider credentials are absent or unusable."""

    def __init__(self, fields):
        self.fields = list(fields)
        super().__init__(f"missing or invalid gateway configuration: {', '.join(self.fields)}")


class MissingHeaderError(SigningError):
    """Raised when an inbound callback lacks one of the signing headers."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(f"missing {header} header")
