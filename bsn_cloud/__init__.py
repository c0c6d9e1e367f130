"""Async client for the BSN.cloud device management API."""

from .bsn_time import BSN_ZERO_TIME, decode_bsn_time, encode_bsn_time, is_zero_time
from .client import BsnCloudClient
from .config import BsnCloudConfig
from .decoding import (
    decode_beacon,
    decode_beacons,
    decode_flexible_list,
    decode_interface_settings,
    decode_interface_status,
    decode_player,
    decode_player_list,
    decode_presentation_list,
    normalize_flexible_list,
)
from .exceptions import (
    BsnAuthError,
    BsnCloudError,
    BsnDecodeError,
    BsnEmptyResponseError,
    BsnHTTPStatusError,
    BsnTenantSelectionError,
    BsnTransportError,
    InvalidTimestampError,
    MalformedShapeError,
    MissingDiscriminatorError,
    UnknownVariantError,
)
from .models import AccessToken, Network, Player
from .session import SessionManager

__all__ = [
    "BSN_ZERO_TIME",
    "AccessToken",
    "BsnAuthError",
    "BsnCloudClient",
    "BsnCloudConfig",
    "BsnCloudError",
    "BsnDecodeError",
    "BsnEmptyResponseError",
    "BsnHTTPStatusError",
    "BsnTenantSelectionError",
    "BsnTransportError",
    "InvalidTimestampError",
    "MalformedShapeError",
    "MissingDiscriminatorError",
    "Network",
    "Player",
    "SessionManager",
    "UnknownVariantError",
    "decode_beacon",
    "decode_beacons",
    "decode_bsn_time",
    "decode_flexible_list",
    "decode_interface_settings",
    "decode_interface_status",
    "decode_player",
    "decode_player_list",
    "decode_presentation_list",
    "encode_bsn_time",
    "is_zero_time",
    "normalize_flexible_list",
]
