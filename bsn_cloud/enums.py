"""Enumerations mirrored from the BSN.cloud API documentation.

Every catalog has an UNKNOWN member for absent values. Values the client
does not know yet decode to a pseudo-member that keeps the raw string
instead of failing, since the vendor keeps adding models and families.
"""

from __future__ import annotations

from enum import StrEnum


class BsnEnum(StrEnum):
    """String enumeration that keeps values missing from the catalog."""

    @classmethod
    def _missing_(cls, value: object) -> BsnEnum | None:
        if not isinstance(value, str):
            return None
        pseudo_member = str.__new__(cls, value)
        pseudo_member._name_ = value
        pseudo_member._value_ = value
        return cls._value2member_map_.setdefault(value, pseudo_member)

    @property
    def is_known(self) -> bool:
        """Return True if the value is declared in the catalog."""
        return type(self)._member_map_.get(self._name_) is self


class PlayerModel(BsnEnum):
    """Supported player models."""

    HD223 = "HD223"
    HD1023 = "HD1023"
    HD1423 = "HD1423"
    LS423 = "LS423"
    XD233 = "XD233"
    XD1033 = "XD1033"
    XD1133 = "XD1133"
    XT243 = "XT243"
    XT1043 = "XT1043"
    XT1143 = "XT1143"
    M4K242 = "4K242"
    M4K1042 = "4K1042"
    M4K1142 = "4K1142"
    HS123 = "HS123"
    HO523 = "HO523"
    XD234 = "XD234"
    XD1034 = "XD1034"
    XT244 = "XT244"
    XT1144 = "XT1144"
    HS124 = "HS124"
    HS144 = "HS144"
    LS424 = "LS424"
    HD224 = "HD224"
    HD1024 = "HD1024"
    AU325 = "AU325"
    AU335 = "AU335"
    XC2055 = "XC2055"
    XC4055 = "XC4055"
    XD235 = "XD235"
    XD1035 = "XD1035"
    LS425 = "LS425"
    LS445 = "LS445"
    HS125 = "HS125"
    HS145 = "HS145"
    HD225 = "HD225"
    HD1025 = "HD1025"
    XT245 = "XT245"
    XT1145 = "XT1145"
    XT2145 = "XT2145"
    LGUV5N = "LGUV5N"
    MD435 = "MD435"
    HD226 = "HD226"
    HD1026 = "HD1026"
    XD236 = "XD236"
    XD1036 = "XD1036"
    XS156 = "XS156"
    UNKNOWN = "Unknown"


class PlayerFamily(BsnEnum):
    """Supported player families."""

    TIGER = "Tiger"
    PANTERA = "Pantera"
    IMPALA = "Impala"
    MALIBU = "Malibu"
    PAGANI = "Pagani"
    SEBRING = "Sebring"
    RAPTOR = "Raptor"
    COBRA = "Cobra"
    UNKNOWN = "Unknown"


class DeviceSetupType(BsnEnum):
    STANDALONE = "Standalone"
    BSN = "BSN"
    LFN = "LFN"
    SFN = "SFN"
    PARTNER_APPLICATION = "PartnerApplication"
    UNKNOWN = "Unknown"


class PlayerBeaconMode(BsnEnum):
    IBEACON = "iBeacon"
    EDDYSTONE_UID = "EddystoneUid"
    EDDYSTONE_URL = "EddystoneUrl"
    UNKNOWN = "Unknown"


class NetworkInterfaceType(BsnEnum):
    ETHERNET = "Ethernet"
    WIFI = "WiFi"
    VIRTUAL = "Virtual"
    OTHER = "Other"
    CELLULAR = "Cellular"
    UNKNOWN = "Unknown"


class NetworkConfigurationProtocol(BsnEnum):
    STATIC = "Static"
    DHCPV4 = "DHCPv4"
    DHCPV6 = "DHCPv6"
    NDP = "NDP"
    UNKNOWN = "Unknown"


class ScreenOrientation(BsnEnum):
    UNKNOWN = "Unknown"
    LANDSCAPE = "Landscape"
    PORTRAIT_BOTTOM_LEFT = "PortraitBottomLeft"
    PORTRAIT_BOTTOM_RIGHT = "PortraitBottomRight"


class ScriptType(BsnEnum):
    SETUP = "Setup"
    AUTORUN = "Autorun"
    RECOVERY = "Recovery"
    CUSTOM = "Custom"
    UNKNOWN = "Unknown"


class StorageInterface(BsnEnum):
    INTERNAL = "Internal"
    TMP = "Tmp"
    FLASH = "Flash"
    SD1 = "SD1"
    USB1 = "USB1"
    UNKNOWN = "Unknown"


class FileSystem(BsnEnum):
    EXFAT = "exFAT"
    EXT3 = "ext3"
    EXT4 = "ext4"
    FAT12 = "FAT12"
    FAT16 = "FAT16"
    FAT32 = "FAT32"
    HFS = "HFS"
    HFSPLUS = "HFSplus"
    NTFS = "NTFS"
    UNKNOWN = "Unknown"


class AccessMode(BsnEnum):
    READ = "Read"
    WRITE = "Write"
    UNKNOWN = "Unknown"


class PlayerHealthStatus(BsnEnum):
    NORMAL = "Normal"
    WARNING = "Warning"
    ERROR = "Error"
    UNKNOWN = "Unknown"


class PlayerSubscriptionType(BsnEnum):
    CONTENT = "Content"
    CONTROL = "Control"
    UNKNOWN = "Unknown"


class DeviceSubscriptionStatus(BsnEnum):
    ACTIVE = "Active"
    SUSPENDING = "Suspending"
    SUSPENDED = "Suspended"
    UNKNOWN = "Unknown"


class PrincipalType(BsnEnum):
    USER = "User"
    ROLE = "Role"
    UNKNOWN = "Unknown"
