"""Decoders that turn BSN.cloud JSON payloads into typed models.

The API is loose about its encodings. Polymorphic objects (beacons,
network interfaces) carry a discriminator field, some list fields are
delivered either as a CSV string or as an array, and the presentation
field may be a single object or an array. Each payload is first read as
a plain JSON tree, then committed to a concrete model.

Unknown discriminators are handled differently per family:
    - beacons: unknown mode is an error
    - interface status: unknown type decodes as the standard shape
    - interface settings: unknown type is dropped from the list
"""

from __future__ import annotations

import base64
import binascii
import json
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from .bsn_time import decode_bsn_time, decode_optional_bsn_time
from .enums import (
    AccessMode,
    BsnEnum,
    DeviceSetupType,
    DeviceSubscriptionStatus,
    FileSystem,
    NetworkConfigurationProtocol,
    NetworkInterfaceType,
    PlayerBeaconMode,
    PlayerFamily,
    PlayerHealthStatus,
    PlayerModel,
    PlayerSubscriptionType,
    PrincipalType,
    ScreenOrientation,
    ScriptType,
    StorageInterface,
)
from .exceptions import (
    BsnDecodeError,
    MalformedShapeError,
    MissingDiscriminatorError,
    UnknownVariantError,
)
from .models import (
    BrightWallScreenInfo,
    CellularInterfaceSettings,
    CellularInterfaceStatus,
    CellularModemInfo,
    CellularSimConnection,
    CellularSimInfo,
    DeviceBeacon,
    DeviceInfo,
    DeviceLocation,
    DeviceLogsSettings,
    DeviceScreenSettings,
    DiagnosticWebServerSettings,
    EddystoneUidBeacon,
    EddystoneUrlBeacon,
    EthernetInterfaceSettings,
    FirmwareInfo,
    GroupInfo,
    IBeacon,
    InterfaceTransferSettings,
    LocalWebServerSettings,
    Network,
    NetworkInterfaceStatus,
    Permission,
    Player,
    PlayerFullStatus,
    PlayerNetworkInterfaceSettings,
    PlayerNetworkInterfaceStatus,
    PlayerNetworkSettings,
    PlayerNetworkStatus,
    PlayerScreenshotsSettings,
    PlayerScript,
    PlayerSettings,
    PlayerSubscription,
    PlayerSynchronizationSettings,
    PlayerSynchronizationStatus,
    PresentationInfo,
    Principal,
    ScriptPluginInfo,
    StorageStatus,
    TaggedGroupInfo,
    VirtualInterfaceSettings,
    WiFiInterfaceSettings,
    WiFiSecuritySettings,
)

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")
_E = TypeVar("_E", bound=BsnEnum)

_STANDARD_INTERFACE_TYPES = frozenset(
    {
        NetworkInterfaceType.ETHERNET,
        NetworkInterfaceType.WIFI,
        NetworkInterfaceType.VIRTUAL,
        NetworkInterfaceType.OTHER,
    }
)


# JSON tree helpers


def load_json(payload: bytes | str) -> Any:
    """Parse a JSON document.

    Args:
        payload: Raw JSON text.

    Returns:
        The parsed JSON tree.

    Raises:
        MalformedShapeError: If the payload is not valid JSON.

    """
    try:
        return json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        error_msg = f"Invalid JSON payload: {err}"
        raise MalformedShapeError(error_msg) from err


def _as_tree(raw: Any) -> Any:
    if isinstance(raw, bytes | bytearray | str):
        return load_json(raw)
    return raw


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    return type(value).__name__


def _require_object(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        error_msg = f"{what}: expected object, got {_type_name(value)}"
        raise MalformedShapeError(error_msg)
    return value


def _require_list(value: Any, what: str) -> list[Any]:
    if not isinstance(value, list):
        error_msg = f"{what}: expected array, got {_type_name(value)}"
        raise MalformedShapeError(error_msg)
    return value


def _field_error(key: str, expected: str, value: Any) -> MalformedShapeError:
    error_msg = f"Field {key!r}: expected {expected}, got {_type_name(value)}"
    return MalformedShapeError(error_msg)


def _get_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _field_error(key, "string", value)
    return value


def _get_optional_str(data: dict[str, Any], key: str) -> str | None:
    if data.get(key) is None:
        return None
    return _get_str(data, key)


def _get_optional_int(data: dict[str, Any], key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    # bool is a subclass of int but never a valid number on the wire
    if isinstance(value, bool) or not isinstance(value, int):
        raise _field_error(key, "integer", value)
    return value


def _get_int(data: dict[str, Any], key: str) -> int:
    value = _get_optional_int(data, key)
    return 0 if value is None else value


def _get_optional_float(data: dict[str, Any], key: str) -> float | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise _field_error(key, "number", value)
    return float(value)


def _get_bool(data: dict[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _field_error(key, "boolean", value)
    return value


def _get_str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise _field_error(key, "array of strings", value)
    return list(value)


def _get_object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise _field_error(key, "object", value)
    return value


def _get_optional_object(data: dict[str, Any], key: str) -> dict[str, Any] | None:
    if data.get(key) is None:
        return None
    return _get_object(data, key)


def _get_object_list(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise _field_error(key, "array of objects", value)
    return list(value)


def _get_enum(data: dict[str, Any], key: str, enum_cls: type[_E]) -> _E:
    value = data.get(key)
    if value is None:
        return enum_cls("Unknown")
    if not isinstance(value, str):
        raise _field_error(key, "string", value)
    return enum_cls(value)


def _get_bytes(data: dict[str, Any], key: str) -> bytes:
    """Read a base64 encoded byte string."""
    value = _get_str(data, key)
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as err:
        error_msg = f"Field {key!r}: invalid base64 data"
        raise MalformedShapeError(error_msg) from err


# Flexible lists


def normalize_flexible_list(raw: Any) -> list[str]:
    """Normalize a list field that may arrive as CSV or as an array.

    Args:
        raw: Raw JSON value of the field.

    Returns:
        For a string, its comma separated parts, trimmed, without empty
        parts. For an array, its string elements in order. An empty
        list for anything else, including null.

    """
    if isinstance(raw, str):
        return [part.strip() for part in raw.split(",") if part.strip()]
    if isinstance(raw, list):
        return [item for item in raw if isinstance(item, str)]
    return []


def decode_flexible_list(raw: Any, factory: Callable[[str], _T]) -> list[_T]:
    """Normalize a CSV-or-array field and convert each value.

    Args:
        raw: Raw JSON value of the field.
        factory: Conversion applied to every normalized value, usually an
            enum class.

    Returns:
        List of converted values, in wire order.

    """
    return [factory(value) for value in normalize_flexible_list(raw)]


# Variant dispatch


def _read_discriminator(data: dict[str, Any], key: str, family: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        error_msg = f"Missing or invalid {key!r} field in {family}"
        raise MissingDiscriminatorError(error_msg)
    return value


def _decode_ibeacon(data: dict[str, Any]) -> IBeacon:
    return IBeacon(
        name=_get_str(data, "name"),
        mode=PlayerBeaconMode.IBEACON,
        major=_get_int(data, "major"),
        minor=_get_int(data, "minor"),
        uuid=_get_str(data, "uuid"),
        power=_get_int(data, "power"),
    )


def _decode_eddystone_uid(data: dict[str, Any]) -> EddystoneUidBeacon:
    return EddystoneUidBeacon(
        name=_get_str(data, "name"),
        mode=PlayerBeaconMode.EDDYSTONE_UID,
        namespace_id=_get_bytes(data, "namespaceId"),
        instance_id=_get_bytes(data, "instanceId"),
        power=_get_int(data, "power"),
    )


def _decode_eddystone_url(data: dict[str, Any]) -> EddystoneUrlBeacon:
    return EddystoneUrlBeacon(
        name=_get_str(data, "name"),
        mode=PlayerBeaconMode.EDDYSTONE_URL,
        url=_get_str(data, "url"),
        power=_get_int(data, "power"),
    )


_BEACON_DECODERS: dict[str, Callable[[dict[str, Any]], DeviceBeacon]] = {
    PlayerBeaconMode.IBEACON: _decode_ibeacon,
    PlayerBeaconMode.EDDYSTONE_UID: _decode_eddystone_uid,
    PlayerBeaconMode.EDDYSTONE_URL: _decode_eddystone_url,
}


def _beacon_from_tree(tree: Any) -> DeviceBeacon:
    data = _require_object(tree, "beacon")
    mode = _read_discriminator(data, "mode", "beacon")
    decoder = _BEACON_DECODERS.get(mode)
    if decoder is None:
        error_msg = f"Unknown beacon mode: {mode}"
        raise UnknownVariantError(error_msg)
    return decoder(data)


def decode_beacon(raw: Any) -> DeviceBeacon:
    """Decode one beacon, selecting its shape from the "mode" field.

    Args:
        raw: JSON text or an already parsed JSON object.

    Returns:
        IBeacon, EddystoneUidBeacon or EddystoneUrlBeacon.

    Raises:
        MissingDiscriminatorError: If "mode" is absent or not a string.
        UnknownVariantError: If "mode" names no known beacon kind.
        MalformedShapeError: If the payload does not fit the selected shape.

    """
    return _beacon_from_tree(_as_tree(raw))


def _beacons_from_tree(tree: Any) -> list[DeviceBeacon]:
    if tree is None:
        return []
    return [_beacon_from_tree(item) for item in _require_list(tree, "beacons")]


def decode_beacons(raw: Any) -> list[DeviceBeacon]:
    """Decode an array of beacons; any bad element fails the whole array."""
    return _beacons_from_tree(_as_tree(raw))


def _decode_interface_status_fields(data: dict[str, Any]) -> dict[str, Any]:
    """Read the fields shared by every interface status shape."""
    return {
        "name": _get_str(data, "name"),
        "type": _get_enum(data, "type", NetworkInterfaceType),
        "proto": decode_flexible_list(
            data.get("proto"), NetworkConfigurationProtocol
        ),
        "mac": _get_str(data, "mac"),
        "ip": _get_str_list(data, "ip"),
        "gateway": _get_str(data, "gateway"),
        "metric": _get_optional_int(data, "metric"),
    }


def _decode_standard_status(data: dict[str, Any]) -> NetworkInterfaceStatus:
    return NetworkInterfaceStatus(**_decode_interface_status_fields(data))


def _decode_sim_info(data: dict[str, Any]) -> CellularSimInfo:
    connection = _get_object(data, "connection")
    return CellularSimInfo(
        status=_get_str(data, "status"),
        iccid=_get_str(data, "iccid"),
        connection=CellularSimConnection(
            network=_get_str(connection, "network"),
            signal=_get_int(connection, "signal"),
        ),
    )


def _decode_cellular_status(data: dict[str, Any]) -> CellularInterfaceStatus:
    modem = _get_object(data, "modem")
    return CellularInterfaceStatus(
        **_decode_interface_status_fields(data),
        modem=CellularModemInfo(
            imei=_get_str(modem, "imei"),
            manufacturer=_get_str(modem, "manufacturer"),
            model=_get_str(modem, "model"),
            revision=_get_str(modem, "revision"),
        ),
        sims=[_decode_sim_info(sim) for sim in _get_object_list(data, "sims")],
    )


_INTERFACE_STATUS_DECODERS: dict[
    str, Callable[[dict[str, Any]], PlayerNetworkInterfaceStatus]
] = {
    NetworkInterfaceType.CELLULAR: _decode_cellular_status,
    **{kind: _decode_standard_status for kind in _STANDARD_INTERFACE_TYPES},
}


def _interface_status_from_tree(tree: Any) -> PlayerNetworkInterfaceStatus:
    data = _require_object(tree, "network interface status")
    kind = _read_discriminator(data, "type", "network interface status")
    decoder = _INTERFACE_STATUS_DECODERS.get(kind)
    if decoder is None:
        _LOGGER.warning(
            "Unknown network interface type %r, decoding as standard interface",
            kind,
        )
        decoder = _decode_standard_status
    return decoder(data)


def decode_interface_status(raw: Any) -> PlayerNetworkInterfaceStatus:
    """Decode one network interface status, selecting its shape from "type".

    Unknown types are not an error: they decode as NetworkInterfaceStatus.

    Args:
        raw: JSON text or an already parsed JSON object.

    Returns:
        CellularInterfaceStatus or NetworkInterfaceStatus.

    Raises:
        MissingDiscriminatorError: If "type" is absent or not a string.
        MalformedShapeError: If the payload does not fit the selected shape.

    """
    return _interface_status_from_tree(_as_tree(raw))


def decode_network_status(raw: Any) -> PlayerNetworkStatus:
    """Decode a network status block with its interfaces array."""
    data = _require_object(_as_tree(raw), "network status")
    interfaces = data.get("interfaces")
    if interfaces is None:
        interfaces = []
    return PlayerNetworkStatus(
        external_ip=_get_str(data, "externalIp"),
        interfaces=[
            _interface_status_from_tree(item)
            for item in _require_list(interfaces, "interfaces")
        ],
    )


def _decode_transfer_settings(data: dict[str, Any]) -> InterfaceTransferSettings:
    return InterfaceTransferSettings(
        rate_limit_during_initial_downloads=_get_optional_int(
            data, "rateLimitDuringInitialDownloads"
        ),
        rate_limit_inside_content_download_window=_get_optional_int(
            data, "rateLimitInsideContentDownloadWindow"
        ),
        rate_limit_outside_content_download_window=_get_optional_int(
            data, "rateLimitOutsideContentDownloadWindow"
        ),
        content_download_enabled=_get_bool(data, "contentDownloadEnabled"),
        text_feeds_download_enabled=_get_bool(data, "textFeedsDownloadEnabled"),
        media_feeds_download_enabled=_get_bool(data, "mediaFeedsDownloadEnabled"),
        health_reporting_enabled=_get_bool(data, "healthReportingEnabled"),
        logs_upload_enabled=_get_bool(data, "logsUploadEnabled"),
    )


def _decode_ethernet_settings(data: dict[str, Any]) -> EthernetInterfaceSettings:
    return EthernetInterfaceSettings(
        enabled=_get_bool(data, "enabled"),
        name=_get_str(data, "name"),
        type=NetworkInterfaceType.ETHERNET,
        proto=_get_enum(data, "proto", NetworkConfigurationProtocol),
        ip=_get_str_list(data, "ip"),
        gateway=_get_str(data, "gateway"),
        dns=_get_str_list(data, "dns"),
        transfer=_decode_transfer_settings(data),
    )


def _decode_wifi_settings(data: dict[str, Any]) -> WiFiInterfaceSettings:
    security = _get_object(data, "security")
    authentication = _get_object(security, "authentication")
    encryption = _get_object(security, "encryption")
    return WiFiInterfaceSettings(
        enabled=_get_bool(data, "enabled"),
        name=_get_str(data, "name"),
        type=NetworkInterfaceType.WIFI,
        ssid=_get_str(data, "ssid"),
        security=WiFiSecuritySettings(
            authentication_mode=_get_str(authentication, "mode"),
            passphrase=_get_str(authentication, "passphrase"),
            encryption_mode=_get_str(encryption, "mode"),
        ),
        proto=_get_enum(data, "proto", NetworkConfigurationProtocol),
        ip=_get_str_list(data, "ip"),
        gateway=_get_str(data, "gateway"),
        dns=_get_str_list(data, "dns"),
        transfer=_decode_transfer_settings(data),
    )


def _decode_virtual_settings(data: dict[str, Any]) -> VirtualInterfaceSettings:
    return VirtualInterfaceSettings(
        enabled=_get_bool(data, "enabled"),
        name=_get_str(data, "name"),
        type=NetworkInterfaceType.VIRTUAL,
        parent=_get_str(data, "parent"),
        vlan_id=_get_int(data, "vlanId"),
        proto=_get_enum(data, "proto", NetworkConfigurationProtocol),
        ip=_get_str_list(data, "ip"),
        gateway=_get_str(data, "gateway"),
        dns=_get_str_list(data, "dns"),
        transfer=_decode_transfer_settings(data),
    )


def _decode_cellular_settings(data: dict[str, Any]) -> CellularInterfaceSettings:
    return CellularInterfaceSettings(
        enabled=_get_bool(data, "enabled"),
        name=_get_str(data, "name"),
        type=NetworkInterfaceType.CELLULAR,
        modems=_get_object_list(data, "modems"),
        model=_get_str(data, "model"),
        usb_device_ids=_get_str_list(data, "usbDeviceIds"),
        sims=_get_object_list(data, "sims"),
        mcc=_get_str(data, "mcc"),
        mnc=_get_str(data, "mnc"),
        connection=_get_optional_object(data, "connection"),
        transfer=_decode_transfer_settings(data),
    )


_INTERFACE_SETTINGS_DECODERS: dict[
    str, Callable[[dict[str, Any]], PlayerNetworkInterfaceSettings]
] = {
    NetworkInterfaceType.ETHERNET: _decode_ethernet_settings,
    NetworkInterfaceType.WIFI: _decode_wifi_settings,
    NetworkInterfaceType.VIRTUAL: _decode_virtual_settings,
    NetworkInterfaceType.CELLULAR: _decode_cellular_settings,
}


def _interface_settings_from_tree(
    tree: Any,
) -> PlayerNetworkInterfaceSettings | None:
    data = _require_object(tree, "network interface settings")
    kind = _read_discriminator(data, "type", "network interface settings")
    decoder = _INTERFACE_SETTINGS_DECODERS.get(kind)
    if decoder is None:
        _LOGGER.warning("Dropping network interface settings of unknown type %r", kind)
        return None
    return decoder(data)


def decode_interface_settings(raw: Any) -> PlayerNetworkInterfaceSettings | None:
    """Decode one network interface settings entry from its "type" field.

    Args:
        raw: JSON text or an already parsed JSON object.

    Returns:
        Ethernet, WiFi, Virtual or Cellular settings, or None when the
        type is unknown.

    Raises:
        MissingDiscriminatorError: If "type" is absent or not a string.
        MalformedShapeError: If the payload does not fit the selected shape.

    """
    return _interface_settings_from_tree(_as_tree(raw))


def _interface_settings_list_from_tree(
    tree: Any,
) -> list[PlayerNetworkInterfaceSettings]:
    if tree is None:
        return []
    decoded = (
        _interface_settings_from_tree(item)
        for item in _require_list(tree, "interfaces")
    )
    return [settings for settings in decoded if settings is not None]


def decode_interface_settings_list(raw: Any) -> list[PlayerNetworkInterfaceSettings]:
    """Decode an array of interface settings, leaving out unknown types."""
    return _interface_settings_list_from_tree(_as_tree(raw))


def decode_network_settings(raw: Any) -> PlayerNetworkSettings:
    """Decode a network settings block with its interfaces array."""
    data = _require_object(_as_tree(raw), "network settings")
    return PlayerNetworkSettings(
        hostname=_get_str(data, "hostname"),
        proxy_server=_get_str(data, "proxyServer"),
        proxy_bypass=_get_str_list(data, "proxyBypass"),
        time_servers=_get_str_list(data, "timeServers"),
        interfaces=_interface_settings_list_from_tree(data.get("interfaces")),
    )


def _decode_presentation(data: Any) -> PresentationInfo:
    presentation = _require_object(data, "presentation")
    return PresentationInfo(
        id=_get_int(presentation, "id"),
        name=_get_str(presentation, "name"),
        link=_get_str(presentation, "link"),
    )


def decode_presentation_list(raw: Any) -> list[PresentationInfo]:
    """Decode the presentation field by the shape of its value.

    An object becomes a one element list, an array is decoded element by
    element, and null or any other value gives an empty list.
    """
    if isinstance(raw, dict):
        return [_decode_presentation(raw)]
    if isinstance(raw, list):
        return [_decode_presentation(item) for item in raw]
    return []


# Resource decoding


def _decode_group(data: dict[str, Any]) -> GroupInfo:
    return GroupInfo(id=_get_int(data, "id"), name=_get_str(data, "name"))


def _decode_bright_wall(data: dict[str, Any]) -> BrightWallScreenInfo:
    return BrightWallScreenInfo(
        id=_get_optional_int(data, "id"),
        name=_get_str(data, "name"),
        screen=_get_int(data, "screen"),
        link=_get_str(data, "link"),
    )


def _decode_period(data: dict[str, Any], key: str) -> str | None:
    block = _get_optional_object(data, key)
    if block is None:
        return None
    return _get_str(block, "period")


def _decode_synchronization_settings(
    data: dict[str, Any],
) -> PlayerSynchronizationSettings:
    content = _get_optional_object(data, "content")
    return PlayerSynchronizationSettings(
        status_period=_decode_period(data, "status"),
        settings_period=_decode_period(data, "settings"),
        schedule_period=_decode_period(data, "schedule"),
        content_start=None if content is None else _get_str(content, "start"),
        content_end=None if content is None else _get_str(content, "end"),
    )


def _decode_location(data: dict[str, Any]) -> DeviceLocation:
    return DeviceLocation(
        place_id=_get_str(data, "placeId"),
        gps_latitude=_get_optional_float(data, "gpsLatitude"),
        gps_longitude=_get_optional_float(data, "gpsLongitude"),
        country=_get_str(data, "country"),
        country_long_name=_get_str(data, "countryLongName"),
        admin_area_level1=_get_str(data, "adminAreaLevel1"),
        admin_area_level1_long_name=_get_str(data, "adminAreaLevel1LongName"),
        admin_area_level2=_get_str(data, "adminAreaLevel2"),
        admin_area_level2_long_name=_get_str(data, "adminAreaLevel2LongName"),
        locality=_get_str(data, "locality"),
        locality_long_name=_get_str(data, "localityLongName"),
        path=_get_str(data, "path"),
        path_long_name=_get_str(data, "pathLongName"),
    )


def _decode_screenshots(data: dict[str, Any]) -> PlayerScreenshotsSettings:
    return PlayerScreenshotsSettings(
        interval=_get_str(data, "interval"),
        count_limit=_get_int(data, "countLimit"),
        quality=_get_int(data, "quality"),
        orientation=_get_enum(data, "orientation", ScreenOrientation),
    )


def _decode_logs_settings(data: dict[str, Any]) -> DeviceLogsSettings:
    return DeviceLogsSettings(
        enable_diagnostic_log=_get_bool(data, "enableDiagnosticLog"),
        enable_event_log=_get_bool(data, "enableEventLog"),
        enable_playback_log=_get_bool(data, "enablePlaybackLog"),
        enable_state_log=_get_bool(data, "enableStateLog"),
        enable_variable_log=_get_bool(data, "enableVariableLog"),
        upload_at_boot=_get_bool(data, "uploadAtBoot"),
        upload_time=_get_optional_str(data, "uploadTime"),
    )


def _decode_screen(data: dict[str, Any]) -> DeviceScreenSettings:
    return DeviceScreenSettings(
        idle_color=_get_str(data, "idleColor"),
        splash_url=_get_str(data, "splashUrl"),
    )


def _decode_local_web_server(data: dict[str, Any]) -> LocalWebServerSettings:
    return LocalWebServerSettings(
        username=_get_str(data, "username"),
        password=_get_str(data, "password"),
        enable_update_notifications=_get_bool(data, "enableUpdateNotifications"),
    )


def _decode_optional(
    data: dict[str, Any],
    key: str,
    decoder: Callable[[dict[str, Any]], _T],
) -> _T | None:
    """Decode a nested block only when it is present."""
    block = _get_optional_object(data, key)
    if block is None:
        return None
    return decoder(block)


def decode_player_settings(raw: Any) -> PlayerSettings:
    """Decode the settings sub-tree of a player."""
    data = _require_object(_as_tree(raw), "settings")
    beacons = data.get("beacons")
    return PlayerSettings(
        name=_get_str(data, "name"),
        description=_get_str(data, "description"),
        concat_name_and_serial=_get_bool(data, "concatNameAndSerial"),
        setup_type=_get_enum(data, "setupType", DeviceSetupType),
        group=_decode_optional(data, "group", _decode_group),
        bright_wall=_decode_optional(data, "brightWall", _decode_bright_wall),
        timezone=_get_str(data, "timezone"),
        screen=_decode_optional(data, "screen", _decode_screen),
        synchronization=_decode_optional(
            data, "synchronization", _decode_synchronization_settings
        ),
        network=_decode_optional(data, "network", decode_network_settings),
        beacons=None if beacons is None else _beacons_from_tree(beacons),
        location=_decode_optional(data, "location", _decode_location),
        screenshots=_decode_optional(data, "screenshots", _decode_screenshots),
        logging=_decode_optional(data, "logging", _decode_logs_settings),
        lws=_decode_optional(data, "lws", _decode_local_web_server),
        ldws=_decode_optional(
            data,
            "ldws",
            lambda block: DiagnosticWebServerSettings(
                password=_get_str(block, "password")
            ),
        ),
        last_modified_date=decode_optional_bsn_time(data.get("lastModifiedDate")),
    )


def _decode_storage(data: dict[str, Any]) -> StorageStatus:
    return StorageStatus(
        interface=_get_enum(data, "interface", StorageInterface),
        system=_get_enum(data, "system", FileSystem),
        access=decode_flexible_list(data.get("access"), AccessMode),
        stats=dict(_get_object(data, "stats")),
    )


def _decode_script(data: dict[str, Any]) -> PlayerScript:
    return PlayerScript(
        type=_get_enum(data, "type", ScriptType),
        version=_get_str(data, "version"),
        plugins=[
            ScriptPluginInfo(
                file_name=_get_str(plugin, "fileName"),
                file_size=_get_int(plugin, "fileSize"),
                file_hash=_get_str(plugin, "fileHash"),
            )
            for plugin in _get_object_list(data, "plugins")
        ],
    )


def _decode_synchronization_status(
    data: dict[str, Any],
) -> PlayerSynchronizationStatus:
    return PlayerSynchronizationStatus(
        settings_enabled=_get_bool(_get_object(data, "settings"), "enabled"),
        schedule_enabled=_get_bool(_get_object(data, "schedule"), "enabled"),
        content_enabled=_get_bool(_get_object(data, "content"), "enabled"),
    )


def decode_player_status(raw: Any) -> PlayerFullStatus:
    """Decode the status sub-tree of a player."""
    data = _require_object(_as_tree(raw), "status")
    return PlayerFullStatus(
        group=_decode_group(_get_object(data, "group")),
        bright_wall=_decode_optional(data, "brightWall", _decode_bright_wall),
        presentation=decode_presentation_list(data.get("presentation")),
        script=_decode_script(_get_object(data, "script")),
        firmware=FirmwareInfo(
            version=_get_str(_get_object(data, "firmware"), "version")
        ),
        storage=[_decode_storage(item) for item in _get_object_list(data, "storage")],
        network=decode_network_status(_get_object(data, "network")),
        uptime=_get_str(data, "uptime"),
        current_settings_timestamp=decode_bsn_time(
            data.get("currentSettingsTimestamp")
        ),
        current_schedule_timestamp=decode_bsn_time(
            data.get("currentScheduleTimestamp")
        ),
        timezone=_get_str(data, "timezone"),
        health=_get_enum(data, "health", PlayerHealthStatus),
        last_modified_date=decode_optional_bsn_time(data.get("lastModifiedDate")),
        synchronization=_decode_synchronization_status(
            _get_object(data, "synchronization")
        ),
    )


def _decode_subscription(data: dict[str, Any]) -> PlayerSubscription:
    device = _get_object(data, "device")
    return PlayerSubscription(
        id=_get_int(data, "id"),
        device=DeviceInfo(id=_get_int(device, "id"), serial=_get_str(device, "serial")),
        type=_get_enum(data, "type", PlayerSubscriptionType),
        activity_period=_get_str(data, "activityPeriod"),
        status=_get_enum(data, "status", DeviceSubscriptionStatus),
        creation_date=decode_bsn_time(data.get("creationDate")),
        activation_date=decode_optional_bsn_time(data.get("activationDate")),
        suspension_date=decode_optional_bsn_time(data.get("suspensionDate")),
        expiration_date=decode_optional_bsn_time(data.get("expirationDate")),
        last_modified_date=decode_bsn_time(data.get("lastModifiedDate")),
    )


def _decode_tagged_group(data: dict[str, Any]) -> TaggedGroupInfo:
    tags = _get_object(data, "tags")
    if not all(isinstance(value, str) for value in tags.values()):
        raise _field_error("tags", "object of strings", tags)
    return TaggedGroupInfo(
        id=_get_int(data, "id"),
        name=_get_str(data, "name"),
        tags=dict(tags),
    )


def _decode_permission(data: dict[str, Any]) -> Permission:
    principal = _get_object(data, "principal")
    return Permission(
        entity_id=_get_optional_int(data, "entityId"),
        operation_uid=_get_str(data, "operationUID"),
        principal=Principal(
            name=_get_str(principal, "name"),
            is_custom=_get_bool(principal, "isCustom"),
            type=_get_enum(principal, "type", PrincipalType),
            id=_get_int(principal, "id"),
        ),
        user=_get_str(data, "user"),
        role=_get_str(data, "role"),
        is_fixed=_get_bool(data, "isFixed"),
        is_inherited=_get_bool(data, "isInherited"),
        is_allowed=_get_bool(data, "isAllowed"),
        creation_date=decode_bsn_time(data.get("creationDate")),
    )


def decode_player(raw: Any) -> Player:
    """Decode a player (device) resource.

    Args:
        raw: JSON text or an already parsed JSON object.

    Returns:
        The decoded Player. Nothing is returned partially: the first
        failing field aborts the decode.

    Raises:
        BsnDecodeError: If any part of the resource cannot be decoded.

    """
    data = _require_object(_as_tree(raw), "player")
    return Player(
        id=_get_int(data, "id"),
        serial=_get_str(data, "serial"),
        model=_get_enum(data, "model", PlayerModel),
        family=_get_enum(data, "family", PlayerFamily),
        registration_date=decode_bsn_time(data.get("registrationDate")),
        last_modified_date=decode_bsn_time(data.get("lastModifiedDate")),
        settings=decode_player_settings(_get_object(data, "settings")),
        status=decode_player_status(_get_object(data, "status")),
        subscription=_decode_subscription(_get_object(data, "subscription")),
        tagged_groups=[
            _decode_tagged_group(group) for group in _get_object_list(data, "taggedGroups")
        ],
        permissions=[
            _decode_permission(permission)
            for permission in _get_object_list(data, "permissions")
        ],
    )


def _decode_items(
    raw: Any,
    decoder: Callable[[dict[str, Any]], _T],
) -> list[_T]:
    """Decode every element of an {"items": [...]} envelope.

    A failing element aborts the whole list; the error gets a note naming
    the element's index.
    """
    envelope = _require_object(_as_tree(raw), "response")
    items = envelope.get("items")
    if items is None:
        return []

    results = []
    for index, item in enumerate(_require_list(items, "items")):
        try:
            results.append(decoder(_require_object(item, "item")))
        except BsnDecodeError as err:
            err.add_note(f"while decoding items[{index}]")
            raise
    return results


def decode_player_list(raw: Any) -> list[Player]:
    """Decode a device listing envelope into players."""
    return _decode_items(raw, decode_player)


def _decode_network(data: dict[str, Any]) -> Network:
    return Network(id=_get_str(data, "id"), name=_get_str(data, "name"))


def decode_network_list(raw: Any) -> list[Network]:
    """Decode a network listing envelope."""
    return _decode_items(raw, _decode_network)
