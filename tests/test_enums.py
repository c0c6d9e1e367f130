"""Tests for the BSN.cloud enumerations."""

from bsn_cloud.enums import NetworkInterfaceType, PlayerFamily, PlayerModel


class TestBsnEnum:
    """Tests for the shared enumeration behavior."""

    def test_known_value_returns_declared_member(self) -> None:
        """Test that a catalog value returns its member."""
        model = PlayerModel("XT1144")
        assert model is PlayerModel.XT1144
        assert model.is_known is True

    def test_unknown_value_keeps_raw_string(self) -> None:
        """Test that a value missing from the catalog is kept as is."""
        model = PlayerModel("XT2146")
        assert isinstance(model, PlayerModel)
        assert model == "XT2146"
        assert str(model) == "XT2146"
        assert model.is_known is False
        assert model != PlayerModel.UNKNOWN

    def test_unknown_value_returns_same_object(self) -> None:
        """Test that repeated lookups of a new value give one object."""
        assert PlayerFamily("Cobra") is PlayerFamily("Cobra")

    def test_unknown_value_is_not_listed_as_member(self) -> None:
        """Test that new values do not extend the declared catalog."""
        NetworkInterfaceType("Satellite")
        assert "Satellite" not in [member.value for member in NetworkInterfaceType]

    def test_unknown_member_is_known(self) -> None:
        """Test that the declared UNKNOWN member counts as known."""
        assert PlayerModel("Unknown") is PlayerModel.UNKNOWN
        assert PlayerModel.UNKNOWN.is_known is True
