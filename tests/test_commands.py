import pytest

from tascli.commands import (
    COMMANDS,
    encode_custom,
    resolve,
    resolve_address,
    resolve_request,
)
from tascli.errors import UnknownCommandError, UsageError


class TestResolve:
    @pytest.mark.parametrize("mnemonic,wire", [
        ("on", "Power%20On"),
        ("off", "Power%20Off"),
        ("status", "Status0"),
        ("statusall", "Status0"),
        ("timers", "Timers"),
    ])
    def test_known_mnemonics(self, mnemonic, wire):
        assert resolve(mnemonic) == wire

    def test_every_mnemonic_has_a_command(self):
        assert set(COMMANDS) == {"on", "off", "status", "statusall", "timers"}

    def test_unknown_mnemonic(self):
        with pytest.raises(UnknownCommandError) as exc:
            resolve("reboot")
        assert exc.value.mnemonic == "reboot"
        assert "reboot" in str(exc.value)

    def test_unknown_is_usage_error(self):
        with pytest.raises(UsageError):
            resolve("")

    def test_case_and_whitespace_normalized(self):
        assert resolve("ON") == "Power%20On"
        assert resolve(" Timers ") == "Timers"


class TestEncodeCustom:
    def test_spaces_and_specials(self):
        assert encode_custom("Power Toggle") == "Power+Toggle"
        assert encode_custom("Backlog Power On; Delay 10") == "Backlog+Power+On%3B+Delay+10"

    def test_no_validation(self):
        assert encode_custom("NotARealCommand") == "NotARealCommand"


class TestResolveRequest:
    def test_mnemonic(self):
        req = resolve_request(cmd="Status")
        assert req.wire == "Status0"
        assert req.mnemonic == "status"
        assert not req.is_custom

    def test_custom(self):
        req = resolve_request(custom="Power Toggle")
        assert req.wire == "Power+Toggle"
        assert req.mnemonic is None
        assert req.custom == "Power Toggle"
        assert req.is_custom

    def test_both_rejected(self):
        with pytest.raises(UsageError, match="same time"):
            resolve_request(cmd="on", custom="Power On")

    def test_neither_rejected(self):
        with pytest.raises(UsageError, match="must be set"):
            resolve_request()

    def test_unknown_mnemonic_rejected(self):
        with pytest.raises(UnknownCommandError):
            resolve_request(cmd="reboot")


class TestResolveAddress:
    DEVICES = {"lamp": "192.168.1.50"}

    def test_host(self):
        target = resolve_address(host="10.0.0.2")
        assert target.address == "10.0.0.2"
        assert target.label == "10.0.0.2"

    def test_named_device(self):
        target = resolve_address(device="lamp", devices=self.DEVICES)
        assert target.address == "192.168.1.50"
        assert target.label == "lamp"

    def test_unknown_device(self):
        with pytest.raises(UsageError, match="not found"):
            resolve_address(device="fan", devices=self.DEVICES)

    def test_both_rejected(self):
        with pytest.raises(UsageError):
            resolve_address(host="10.0.0.2", device="lamp", devices=self.DEVICES)

    def test_neither_rejected(self):
        with pytest.raises(UsageError):
            resolve_address(devices=self.DEVICES)
