"""Exceptions raised by the BSN.cloud client."""


class BsnCloudError(Exception):
    """Base exception for BSN.cloud client errors."""


class BsnTransportError(BsnCloudError):
    """Exception raised when a request fails before any response exists."""


class BsnHTTPStatusError(BsnCloudError):
    """Exception raised when the API answers with an unexpected status code.

    Attributes:
        status_code: HTTP status code of the response, if one was received.
        body: Response body text, if one was received.

    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
    ) -> None:
        """Initialize the error with the response details."""
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class BsnAuthError(BsnHTTPStatusError):
    """Exception raised when the credential exchange fails."""


class BsnTenantSelectionError(BsnHTTPStatusError):
    """Exception raised when the network context cannot be selected."""


class BsnEmptyResponseError(BsnCloudError):
    """Exception raised when a response that must carry a body is empty."""


class BsnDecodeError(BsnCloudError):
    """Base exception for payloads that cannot be decoded."""


class MissingDiscriminatorError(BsnDecodeError):
    """Exception raised when a variant payload has no usable discriminator."""


class UnknownVariantError(BsnDecodeError):
    """Exception raised when a discriminator names no known variant."""


class InvalidTimestampError(BsnDecodeError):
    """Exception raised when a timestamp matches none of the known formats."""


class MalformedShapeError(BsnDecodeError):
    """Exception raised when a payload does not have the expected structure."""
