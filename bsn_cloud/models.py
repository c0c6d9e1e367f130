"""Data models for the BSN.cloud client."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .bsn_time import BSN_ZERO_TIME
from .enums import (
    AccessMode,
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

# Durations are kept exactly as the API formats them, e.g. "1.00:00:00"
TimeSpan = str


@dataclass(frozen=True)
class AccessToken:
    """Represents a bearer token with its expiration timestamp."""

    token: str
    expire_at: datetime
    token_type: str = "Bearer"


@dataclass(frozen=True)
class Network:
    """Represents a BSN.cloud network (tenant).

    Attributes:
        id: Unique network identifier.
        name: Network name used for session selection.

    """

    id: str
    name: str


# Beacons


@dataclass(frozen=True)
class IBeacon:
    name: str = ""
    mode: PlayerBeaconMode = PlayerBeaconMode.IBEACON
    major: int = 0
    minor: int = 0
    uuid: str = ""
    power: int = 0


@dataclass(frozen=True)
class EddystoneUidBeacon:
    name: str = ""
    mode: PlayerBeaconMode = PlayerBeaconMode.EDDYSTONE_UID
    namespace_id: bytes = b""
    instance_id: bytes = b""
    power: int = 0


@dataclass(frozen=True)
class EddystoneUrlBeacon:
    name: str = ""
    mode: PlayerBeaconMode = PlayerBeaconMode.EDDYSTONE_URL
    url: str = ""
    power: int = 0


DeviceBeacon = IBeacon | EddystoneUidBeacon | EddystoneUrlBeacon


# Network status


@dataclass(frozen=True)
class CellularModemInfo:
    imei: str = ""
    manufacturer: str = ""
    model: str = ""
    revision: str = ""


@dataclass(frozen=True)
class CellularSimConnection:
    network: str = ""
    signal: int = 0


@dataclass(frozen=True)
class CellularSimInfo:
    status: str = ""
    iccid: str = ""
    connection: CellularSimConnection = field(default_factory=CellularSimConnection)


@dataclass(frozen=True)
class NetworkInterfaceStatus:
    """Status of an Ethernet, WiFi, virtual or otherwise typed interface."""

    name: str = ""
    type: NetworkInterfaceType = NetworkInterfaceType.UNKNOWN
    proto: list[NetworkConfigurationProtocol] = field(default_factory=list)
    mac: str = ""
    ip: list[str] = field(default_factory=list)
    gateway: str = ""
    metric: int | None = None


@dataclass(frozen=True)
class CellularInterfaceStatus:
    """Status of a cellular interface, including modem and SIM details."""

    name: str = ""
    type: NetworkInterfaceType = NetworkInterfaceType.CELLULAR
    proto: list[NetworkConfigurationProtocol] = field(default_factory=list)
    mac: str = ""
    ip: list[str] = field(default_factory=list)
    gateway: str = ""
    metric: int | None = None
    modem: CellularModemInfo = field(default_factory=CellularModemInfo)
    sims: list[CellularSimInfo] = field(default_factory=list)


PlayerNetworkInterfaceStatus = NetworkInterfaceStatus | CellularInterfaceStatus


@dataclass(frozen=True)
class PlayerNetworkStatus:
    external_ip: str = ""
    interfaces: list[PlayerNetworkInterfaceStatus] = field(default_factory=list)


# Network settings


@dataclass(frozen=True)
class WiFiSecuritySettings:
    authentication_mode: str = ""
    passphrase: str = field(default="", repr=False)
    encryption_mode: str = ""


@dataclass(frozen=True)
class InterfaceTransferSettings:
    """Download and reporting switches shared by every interface kind."""

    rate_limit_during_initial_downloads: int | None = None
    rate_limit_inside_content_download_window: int | None = None
    rate_limit_outside_content_download_window: int | None = None
    content_download_enabled: bool = False
    text_feeds_download_enabled: bool = False
    media_feeds_download_enabled: bool = False
    health_reporting_enabled: bool = False
    logs_upload_enabled: bool = False


@dataclass(frozen=True)
class EthernetInterfaceSettings:
    enabled: bool = False
    name: str = ""
    type: NetworkInterfaceType = NetworkInterfaceType.ETHERNET
    proto: NetworkConfigurationProtocol = NetworkConfigurationProtocol.UNKNOWN
    ip: list[str] = field(default_factory=list)
    gateway: str = ""
    dns: list[str] = field(default_factory=list)
    transfer: InterfaceTransferSettings = field(
        default_factory=InterfaceTransferSettings
    )


@dataclass(frozen=True)
class WiFiInterfaceSettings:
    enabled: bool = False
    name: str = ""
    type: NetworkInterfaceType = NetworkInterfaceType.WIFI
    ssid: str = ""
    security: WiFiSecuritySettings = field(default_factory=WiFiSecuritySettings)
    proto: NetworkConfigurationProtocol = NetworkConfigurationProtocol.UNKNOWN
    ip: list[str] = field(default_factory=list)
    gateway: str = ""
    dns: list[str] = field(default_factory=list)
    transfer: InterfaceTransferSettings = field(
        default_factory=InterfaceTransferSettings
    )


@dataclass(frozen=True)
class VirtualInterfaceSettings:
    enabled: bool = False
    name: str = ""
    type: NetworkInterfaceType = NetworkInterfaceType.VIRTUAL
    parent: str = ""
    vlan_id: int = 0
    proto: NetworkConfigurationProtocol = NetworkConfigurationProtocol.UNKNOWN
    ip: list[str] = field(default_factory=list)
    gateway: str = ""
    dns: list[str] = field(default_factory=list)
    transfer: InterfaceTransferSettings = field(
        default_factory=InterfaceTransferSettings
    )


@dataclass(frozen=True)
class CellularInterfaceSettings:
    """Cellular interface settings.

    The modem, SIM and connection blocks are undocumented by the vendor,
    so they are kept as the raw JSON objects.
    """

    enabled: bool = False
    name: str = ""
    type: NetworkInterfaceType = NetworkInterfaceType.CELLULAR
    modems: list[dict[str, Any]] = field(default_factory=list)
    model: str = ""
    usb_device_ids: list[str] = field(default_factory=list)
    sims: list[dict[str, Any]] = field(default_factory=list)
    mcc: str = ""
    mnc: str = ""
    connection: dict[str, Any] | None = None
    transfer: InterfaceTransferSettings = field(
        default_factory=InterfaceTransferSettings
    )


PlayerNetworkInterfaceSettings = (
    EthernetInterfaceSettings
    | WiFiInterfaceSettings
    | VirtualInterfaceSettings
    | CellularInterfaceSettings
)


@dataclass(frozen=True)
class PlayerNetworkSettings:
    hostname: str = ""
    proxy_server: str = ""
    proxy_bypass: list[str] = field(default_factory=list)
    time_servers: list[str] = field(default_factory=list)
    interfaces: list[PlayerNetworkInterfaceSettings] = field(default_factory=list)


# Settings sub-tree


@dataclass(frozen=True)
class GroupInfo:
    id: int = 0
    name: str = ""


@dataclass(frozen=True)
class BrightWallScreenInfo:
    id: int | None = None
    name: str = ""
    screen: int = 0
    link: str = ""


@dataclass(frozen=True)
class DeviceScreenSettings:
    idle_color: str = ""
    splash_url: str = ""


@dataclass(frozen=True)
class PlayerSynchronizationSettings:
    """Synchronization periods; each block is None when not configured."""

    status_period: TimeSpan | None = None
    settings_period: TimeSpan | None = None
    schedule_period: TimeSpan | None = None
    content_start: TimeSpan | None = None
    content_end: TimeSpan | None = None


@dataclass(frozen=True)
class DeviceLocation:
    place_id: str = ""
    gps_latitude: float | None = None
    gps_longitude: float | None = None
    country: str = ""
    country_long_name: str = ""
    admin_area_level1: str = ""
    admin_area_level1_long_name: str = ""
    admin_area_level2: str = ""
    admin_area_level2_long_name: str = ""
    locality: str = ""
    locality_long_name: str = ""
    path: str = ""
    path_long_name: str = ""


@dataclass(frozen=True)
class PlayerScreenshotsSettings:
    interval: TimeSpan = ""
    count_limit: int = 0
    quality: int = 0
    orientation: ScreenOrientation = ScreenOrientation.UNKNOWN


@dataclass(frozen=True)
class DeviceLogsSettings:
    enable_diagnostic_log: bool = False
    enable_event_log: bool = False
    enable_playback_log: bool = False
    enable_state_log: bool = False
    enable_variable_log: bool = False
    upload_at_boot: bool = False
    upload_time: TimeSpan | None = None


@dataclass(frozen=True)
class LocalWebServerSettings:
    username: str = ""
    password: str = field(default="", repr=False)
    enable_update_notifications: bool = False


@dataclass(frozen=True)
class DiagnosticWebServerSettings:
    password: str = field(default="", repr=False)


@dataclass(frozen=True)
class PlayerSettings:
    """Settings entity of a player.

    Every nested block is optional and independent of the others: a block
    missing from the payload is None, never an empty instance.
    """

    name: str = ""
    description: str = ""
    concat_name_and_serial: bool = False
    setup_type: DeviceSetupType = DeviceSetupType.UNKNOWN
    group: GroupInfo | None = None
    bright_wall: BrightWallScreenInfo | None = None
    timezone: str = ""
    screen: DeviceScreenSettings | None = None
    synchronization: PlayerSynchronizationSettings | None = None
    network: PlayerNetworkSettings | None = None
    beacons: list[DeviceBeacon] | None = None
    location: DeviceLocation | None = None
    screenshots: PlayerScreenshotsSettings | None = None
    logging: DeviceLogsSettings | None = None
    lws: LocalWebServerSettings | None = None
    ldws: DiagnosticWebServerSettings | None = None
    last_modified_date: datetime | None = None


# Status sub-tree


@dataclass(frozen=True)
class PresentationInfo:
    id: int = 0
    name: str = ""
    link: str = ""


@dataclass(frozen=True)
class ScriptPluginInfo:
    file_name: str = ""
    file_size: int = 0
    file_hash: str = ""


@dataclass(frozen=True)
class PlayerScript:
    type: ScriptType = ScriptType.UNKNOWN
    version: str = ""
    plugins: list[ScriptPluginInfo] = field(default_factory=list)


@dataclass(frozen=True)
class FirmwareInfo:
    version: str = ""


@dataclass(frozen=True)
class StorageStatus:
    """Status of one storage device.

    Attributes:
        stats: Diagnostic figures exactly as reported; the API does not
            fix their schema.

    """

    interface: StorageInterface = StorageInterface.UNKNOWN
    system: FileSystem = FileSystem.UNKNOWN
    access: list[AccessMode] = field(default_factory=list)
    stats: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PlayerSynchronizationStatus:
    settings_enabled: bool = False
    schedule_enabled: bool = False
    content_enabled: bool = False


@dataclass(frozen=True)
class PlayerFullStatus:
    group: GroupInfo = field(default_factory=GroupInfo)
    bright_wall: BrightWallScreenInfo | None = None
    presentation: list[PresentationInfo] = field(default_factory=list)
    script: PlayerScript = field(default_factory=PlayerScript)
    firmware: FirmwareInfo = field(default_factory=FirmwareInfo)
    storage: list[StorageStatus] = field(default_factory=list)
    network: PlayerNetworkStatus = field(default_factory=PlayerNetworkStatus)
    uptime: TimeSpan = ""
    current_settings_timestamp: datetime = BSN_ZERO_TIME
    current_schedule_timestamp: datetime = BSN_ZERO_TIME
    timezone: str = ""
    health: PlayerHealthStatus = PlayerHealthStatus.UNKNOWN
    last_modified_date: datetime | None = None
    synchronization: PlayerSynchronizationStatus = field(
        default_factory=PlayerSynchronizationStatus
    )


# Subscription, groups and permissions


@dataclass(frozen=True)
class DeviceInfo:
    id: int = 0
    serial: str = ""


@dataclass(frozen=True)
class PlayerSubscription:
    id: int = 0
    device: DeviceInfo = field(default_factory=DeviceInfo)
    type: PlayerSubscriptionType = PlayerSubscriptionType.UNKNOWN
    activity_period: TimeSpan = ""
    status: DeviceSubscriptionStatus = DeviceSubscriptionStatus.UNKNOWN
    creation_date: datetime = BSN_ZERO_TIME
    activation_date: datetime | None = None
    suspension_date: datetime | None = None
    expiration_date: datetime | None = None
    last_modified_date: datetime = BSN_ZERO_TIME


@dataclass(frozen=True)
class TaggedGroupInfo:
    id: int = 0
    name: str = ""
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Principal:
    name: str = ""
    is_custom: bool = False
    type: PrincipalType = PrincipalType.UNKNOWN
    id: int = 0


@dataclass(frozen=True)
class Permission:
    entity_id: int | None = None
    operation_uid: str = ""
    principal: Principal = field(default_factory=Principal)
    user: str = ""
    role: str = ""
    is_fixed: bool = False
    is_inherited: bool = False
    is_allowed: bool = False
    creation_date: datetime = BSN_ZERO_TIME


@dataclass(frozen=True)
class Player:
    """Represents a player (device) registered in a BSN.cloud network."""

    id: int
    serial: str
    model: PlayerModel = PlayerModel.UNKNOWN
    family: PlayerFamily = PlayerFamily.UNKNOWN
    registration_date: datetime = BSN_ZERO_TIME
    last_modified_date: datetime = BSN_ZERO_TIME
    settings: PlayerSettings = field(default_factory=PlayerSettings)
    status: PlayerFullStatus = field(default_factory=PlayerFullStatus)
    subscription: PlayerSubscription = field(default_factory=PlayerSubscription)
    tagged_groups: list[TaggedGroupInfo] = field(default_factory=list)
    permissions: list[Permission] = field(default_factory=list)
